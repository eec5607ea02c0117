import json
from pathlib import Path

import pytest

SIMPLE = """// SPDX-License-Identifier: MIT
pragma solidity ^0.8.19;

contract SimpleContract {
    uint256 public value;
    mapping(address => uint256) public data;

    function setValue(uint256 _value) public {
        value = _value;
    }

    function setData(address user, uint256 amount) public {
        data[user] = amount;
    }
}"""

COMPLEX = """// SPDX-License-Identifier: MIT
pragma solidity ^0.8.19;

contract ComplexContract {
    mapping(address => uint256) public balances;
    uint256 public totalSupply;

    event Minted(address indexed to, uint256 amount);

    function mint(address to, uint256 amount) public {
        require(to != address(0), "Invalid address");
        balances[to] += amount;
        totalSupply += amount;
    }

    function transfer(address to, uint256 amount) public {
        require(balances[msg.sender] >= amount, "Insufficient balance");
        balances[msg.sender] -= amount;
        balances[to] += amount;
    }

    function batchTransfer(address[] calldata recipients, uint256[] calldata amounts) external {
        for (uint256 i = 0; i < recipients.length; i++) {
            balances[msg.sender] -= amounts[i];
            balances[recipients[i]] += amounts[i];
        }
    }
}"""

GAS_SNAPSHOT = """TestContract:testApprove() (gas: 39071)
TestContract:testBatchTransfer() (gas: 189623)
TestContract:testMint() (gas: 103729)
TestContract:testTransfer() (gas: 133128)
TestContract:testInefficientSum() (gas: 205766)"""


@pytest.fixture
def simple_source() -> str:
    return SIMPLE


@pytest.fixture
def complex_source() -> str:
    return COMPLEX


@pytest.fixture
def foundry_project(tmp_path: Path) -> Path:
    """A minimal Foundry layout with one contract and a gas snapshot."""
    (tmp_path / "foundry.toml").write_text("[profile.default]\nsrc = 'src'\n")
    src = tmp_path / "src"
    src.mkdir()
    (src / "SimpleContract.sol").write_text(SIMPLE)
    (src / "ComplexContract.sol").write_text(COMPLEX)
    (tmp_path / ".gas-snapshot").write_text(
        "SimpleTest:testSetValue() (gas: 43000)\n"
        "ComplexTest:test_Transfer() (gas: 133128)\n"
    )
    return tmp_path


HARDHAT_GAS_REPORT = {
    "namespace": "HardhatGasReporter",
    "info": {
        "methods": {
            "SimpleContract_0x1": {
                "setValue": {"key": "0x1", "method": "setValue", "avg": 43210},
                "setData": {"key": "0x2", "method": "setData", "avg": None},
            }
        }
    },
}


@pytest.fixture
def hardhat_project(tmp_path: Path) -> Path:
    """A minimal Hardhat layout with one contract and a gas-reporter file."""
    (tmp_path / "hardhat.config.js").write_text("module.exports = {};\n")
    contracts = tmp_path / "contracts"
    contracts.mkdir()
    (contracts / "SimpleContract.sol").write_text(SIMPLE)
    (tmp_path / "gasReporterOutput.json").write_text(json.dumps(HARDHAT_GAS_REPORT))
    return tmp_path
