import pytest

from gasguard_mcp.models import PatternKind
from gasguard_mcp.parser.patterns import (
    GAS_PATTERN_TABLE,
    count_storage_writes,
    detect_patterns,
)


def kinds(code):
    return [p.kind for p in detect_patterns(code)]


class TestPatternTable:
    def test_every_kind_has_an_entry(self):
        assert set(GAS_PATTERN_TABLE) == set(PatternKind)

    @pytest.mark.parametrize(
        "kind,cost",
        [
            (PatternKind.LOOP, 5000),
            (PatternKind.STORAGE_WRITE, 20000),
            (PatternKind.VALIDATION, 500),
            (PatternKind.EXTERNAL_CALL, 2300),
            (PatternKind.ARRAY_OPERATION, 1000),
            (PatternKind.STRING_OPERATION, 2000),
        ],
    )
    def test_base_costs(self, kind, cost):
        assert GAS_PATTERN_TABLE[kind].base_cost == cost


class TestRules:
    def test_nothing_found(self):
        assert detect_patterns("function f() public pure returns (uint) { return 1; }") == []

    @pytest.mark.parametrize(
        "code",
        ["while (x) { }", "for(;;) { }", "for (uint i; i < n; ) { }"],
    )
    def test_loop(self, code):
        assert PatternKind.LOOP in kinds(code)

    def test_loop_needs_keyword_boundary(self):
        assert PatternKind.LOOP not in kinds("platfor(1); meanwhile (x);")

    @pytest.mark.parametrize(
        "code",
        ["a.call(data);", "a.delegatecall(data);", "a.staticcall(data);"],
    )
    def test_external_call(self, code):
        found = detect_patterns(code)
        assert [p.kind for p in found] == [PatternKind.EXTERNAL_CALL]
        assert found[0].estimated_gas == 2300

    def test_call_with_options_is_not_matched(self):
        assert PatternKind.EXTERNAL_CALL not in kinds('to.call{value: 1}("");')

    @pytest.mark.parametrize("code", ["xs.length", "xs.push(1)", "xs.pop()"])
    def test_array_operation(self, code):
        assert kinds(code) == [PatternKind.ARRAY_OPERATION]

    @pytest.mark.parametrize(
        "code",
        ['string(b)', 'abi.encode(a)', 'abi.encodePacked(a, b)'],
    )
    def test_string_operation(self, code):
        assert PatternKind.STRING_OPERATION in kinds(code)

    def test_validation_scales_with_count(self):
        found = detect_patterns("require(a); require (b); require(c);")
        assert [p.kind for p in found] == [PatternKind.VALIDATION]
        assert found[0].estimated_gas == 1500

    def test_fixed_rule_order(self):
        code = (
            "function f() public { require(ok); for (;;) { n = xs.length; } "
            "to.call(abi.encode(n)); }"
        )
        assert kinds(code) == [
            PatternKind.LOOP,
            PatternKind.STORAGE_WRITE,
            PatternKind.VALIDATION,
            PatternKind.EXTERNAL_CALL,
            PatternKind.ARRAY_OPERATION,
            PatternKind.STRING_OPERATION,
        ]


class TestStorageWrites:
    def test_counts_each_assignment(self):
        code = "function f() public { a = 1; b = 2; c[0] = 3; }"
        assert count_storage_writes(code) == 3
        found = detect_patterns(code)
        assert found[0].kind == PatternKind.STORAGE_WRITE
        assert found[0].estimated_gas == 60000

    def test_member_write(self):
        assert count_storage_writes("cfg.owner[0] = msg.sender;") == 1

    @pytest.mark.parametrize(
        "code",
        [
            "if (a == 1) { return; }",
            "if (a != b) { return; }",
            "if (a <= b) { return; }",
            "if (a >= b) { return; }",
            "require(x > 0);",
        ],
    )
    def test_comparisons_are_not_writes(self, code):
        assert count_storage_writes(code) == 0

    def test_match_containing_require_is_excluded(self):
        assert count_storage_writes("a.b; require(c[0] = d);") == 0

    @pytest.mark.parametrize(
        "code",
        [
            "uint256 x = 1;",
            "bool ok = true;",
            "for (uint i=0;i<10;i++) { }",
            "bytes32 memory h = keccak256(data);",
            "address payable to = recipient;",
        ],
    )
    def test_local_declarations_are_not_writes(self, code):
        assert count_storage_writes(code) == 0

    def test_compound_assignment_is_not_counted(self):
        assert count_storage_writes("total += amount; balances[to] -= amount;") == 0
