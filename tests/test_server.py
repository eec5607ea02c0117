import json

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from gasguard_mcp import server


@pytest.mark.asyncio
async def test_analyze_source():
    data = json.loads(await server.analyze_source(
        "contract Foo { function bar() public { x = 1; } }"
    ))
    assert data["name"] == "Foo"
    assert data["functions"][0]["stateMutability"] == "nonpayable"
    assert data["functions"][0]["patterns"][0]["estimatedGas"] == 20000


@pytest.mark.asyncio
async def test_list_rules():
    names = [r["name"] for r in json.loads(await server.list_rules())]
    assert names == ["storage", "loops", "visibility", "operations", "control_flow"]


@pytest.mark.asyncio
async def test_analyze_contracts(foundry_project):
    data = json.loads(await server.analyze_contracts(
        [str(foundry_project / "src" / "SimpleContract.sol")],
    ))
    assert data["summary"]["totalContracts"] == 1
    assert data["contracts"][0]["functions"][0]["gasUsage"] == 43000


@pytest.mark.asyncio
async def test_suggest_optimizations(foundry_project):
    text = await server.suggest_optimizations(
        [str(foundry_project / "src" / "ComplexContract.sol"), "missing.sol"],
    )
    assert "batchTransfer | visibility: external | complexity: 5" in text
    assert "patterns: loop, array_operation" in text
    assert "error: File not found" in text


@pytest.mark.asyncio
async def test_gas_report_written(foundry_project, tmp_path):
    out = tmp_path / "report.md"
    text = await server.gas_report(
        [str(foundry_project / "src" / "SimpleContract.sol")],
        output_path=str(out),
    )
    assert out.read_text() == text
    assert "## Contract: SimpleContract" in text


@pytest.mark.asyncio
async def test_directory_is_expanded(foundry_project):
    data = json.loads(await server.analyze_contracts([str(foundry_project)]))
    assert [c["name"] for c in data["contracts"]] == ["ComplexContract", "SimpleContract"]


@pytest.mark.asyncio
async def test_hardhat_framework(hardhat_project):
    data = json.loads(await server.analyze_contracts(
        [str(hardhat_project / "contracts")], framework="hardhat",
    ))
    assert data["framework"] == "hardhat"
    assert data["contracts"][0]["functions"][0]["gasUsage"] == 43210


@pytest.mark.asyncio
async def test_unknown_framework_is_a_tool_error(foundry_project):
    with pytest.raises(ToolError):
        await server.mcp.call_tool(
            "analyze_contracts",
            {"files": [str(foundry_project / "src")], "framework": "truffle"},
        )
