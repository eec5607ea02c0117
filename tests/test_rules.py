from gasguard_mcp.models import FunctionInfo, Impact, Suggestion
from gasguard_mcp.parser import analyze
from gasguard_mcp.rules import (
    BaseRule,
    ControlFlowRule,
    LoopRule,
    OperationsRule,
    RuleRegistry,
    StorageRule,
    VisibilityRule,
    get_registry,
)


def parse_one(source: str) -> FunctionInfo:
    return analyze(source).functions[0]


def categories(suggestions):
    return [s.category for s in suggestions]


class TestRegistry:
    def test_builtin_rules_registered_in_order(self):
        assert get_registry().names() == [
            "storage", "loops", "visibility", "operations", "control_flow",
        ]

    def test_only_filter(self):
        fn = parse_one("function f() public { for (;;) { x++; } }")
        results = get_registry().run_all(fn, only=["loops"])
        assert results
        assert {s.rule for s in results} == {"loops"}

    def test_unknown_rule_names_are_ignored(self, caplog):
        registry = get_registry()
        selected = registry.select(["loops", "nope"])
        assert [r.name for r in selected] == ["loops"]
        assert "nope" in caplog.text

    def test_failing_rule_is_skipped(self):
        class Broken(BaseRule):
            name = "broken"

            def evaluate(self, function):
                raise RuntimeError("bad rule")

        class Constant(BaseRule):
            name = "constant"

            def evaluate(self, function):
                return [Suggestion(category="x", message="always")]

        registry = RuleRegistry()
        registry.register(Broken())
        registry.register(Constant())
        fn = parse_one("function f() public { }")
        assert [s.message for s in registry.run_all(fn)] == ["always"]


class TestLoopRule:
    def test_no_loop_no_suggestions(self):
        assert LoopRule().evaluate(parse_one("function f() public { x = 1; }")) == []

    def test_loop_over_length_with_increment(self):
        fn = parse_one(
            "function f() public { for (uint i; i < xs.length; i++) { total = xs[i]; } }"
        )
        results = LoopRule().evaluate(fn)
        assert categories(results) == ["loop", "loop", "loop"]
        assert results[0].estimated_saving == 5000

    def test_nested_loops(self):
        fn = parse_one(
            "function f() public { for (;;) { for (;;) { } } }"
        )
        results = LoopRule().evaluate(fn)
        assert any(s.impact == Impact.HIGH for s in results)


class TestStorageRule:
    def test_many_writes(self):
        fn = parse_one("function f() public { a = 1; b = 2; c = 3; d = 4; }")
        results = StorageRule().evaluate(fn)
        heavy = [s for s in results if s.impact == Impact.HIGH]
        assert heavy and heavy[0].estimated_saving == 20000

    def test_default_initialisation(self):
        fn = parse_one("function f() public { paused = false; }")
        messages = [s.message for s in StorageRule().evaluate(fn)]
        assert any("default values" in m for m in messages)

    def test_repeated_reads(self):
        fn = parse_one("function f() public { x = a[i] + a[j] + a[k]; }")
        reads = [s for s in StorageRule().evaluate(fn) if "reads" in s.message]
        assert reads[0].estimated_saving == 2 * 2100


class TestVisibilityRule:
    def test_public_not_called_internally(self):
        fn = parse_one("function f() public { x = 1; }")
        results = VisibilityRule().evaluate(fn)
        assert categories(results) == ["visibility"]
        assert "external" in results[0].message

    def test_external_memory_parameter(self):
        fn = parse_one("function f(string memory s) external { name = s; }")
        results = VisibilityRule().evaluate(fn)
        assert any("calldata" in s.message for s in results)

    def test_pure_candidate(self):
        fn = parse_one("function add(uint a, uint b) public returns (uint) { return a + b; }")
        mutability = [s for s in VisibilityRule().evaluate(fn) if s.category == "mutability"]
        assert len(mutability) == 1
        assert '"pure"' in mutability[0].message

    def test_view_candidate(self):
        fn = parse_one("function owner() internal returns (address) { return msg.sender; }")
        mutability = [s for s in VisibilityRule().evaluate(fn) if s.category == "mutability"]
        assert '"view"' in mutability[0].message

    def test_declared_view_is_left_alone(self):
        fn = parse_one("function getValue() public view returns (uint256) { return value; }")
        assert "mutability" not in categories(VisibilityRule().evaluate(fn))


class TestOperationsRule:
    def test_division_and_modulo(self):
        fn = parse_one("function f(uint a) public { x = a / 2 + a % 3; }")
        assert categories(OperationsRule().evaluate(fn)).count("arithmetic") == 2

    def test_push(self):
        fn = parse_one("function f() public { xs.push(1); }")
        assert "array" in categories(OperationsRule().evaluate(fn))

    def test_explicit_counter_initialisation(self):
        fn = parse_one("function f() public { for (uint256 i = 0; i < 3; ++i) { } }")
        assert "variables" in categories(OperationsRule().evaluate(fn))


class TestControlFlowRule:
    def test_require_chain(self):
        fn = parse_one("function f() public { require(a); require(b); require(c); }")
        chain = [s for s in ControlFlowRule().evaluate(fn) if "require" in s.message]
        assert chain[0].estimated_saving == 3000

    def test_unguarded_call(self):
        fn = parse_one("function f() public { to.call(data); }")
        security = [s for s in ControlFlowRule().evaluate(fn) if s.category == "security"]
        assert security and security[0].estimated_saving == 0

    def test_guarded_call(self):
        fn = parse_one("function f() public { nonReentrant; to.call(data); }")
        assert "security" not in categories(ControlFlowRule().evaluate(fn))

    def test_hashing(self):
        fn = parse_one("function f() public { h = keccak256(data); }")
        assert "assembly" in categories(ControlFlowRule().evaluate(fn))
