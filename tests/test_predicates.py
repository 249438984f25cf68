import textwrap

from styleguard import rules
from styleguard.matcher import apply
from styleguard.result import FindingKind
from styleguard.source import parse


def check(rule_id, source):
    rule = rules.load().get(rule_id)
    model = parse(textwrap.dedent(source).lstrip("\n"), path="Sample.swift")
    return [(finding.line, finding.column) for finding in apply(rule, model)]


def test_prefer_let_flags_unmutated_var_once_at_declaration():
    findings = apply(rules.load().get("prefer-let"), parse("var foo = 5\n", path="Sample.swift"))

    assert len(findings) == 1
    assert (findings[0].line, findings[0].column) == (1, 1)
    assert findings[0].kind is FindingKind.VIOLATION
    assert "foo" in findings[0].message


def test_prefer_let_ignores_mutated_and_special_declarations():
    source = """
    var count = 0
    count += 1
    var items = [Int]()
    items.append(1)
    var a = 1
    swap(&a, &b)
    var area: Int {
        return 1
    }
    @State var flag = false
    lazy var cache = load()
    let fixed = 3
    """
    assert check("prefer-let", source) == []


def test_force_unwrap_reported_once_per_occurrence():
    source = """
    let a = foo!
    let b = foo!.count + bar!
    let c = dict[key]!
    """
    assert check("no-force-unwrap", source) == [(1, 12), (2, 12), (2, 25), (3, 18)]


def test_force_unwrap_ignores_negation_and_types():
    source = """
    if !flag && a != b {
    }
    var label: UILabel!
    let data = try! load()
    let view = thing as! UIView
    """
    assert check("no-force-unwrap", source) == []


def test_implicitly_unwrapped_optional():
    source = """
    @IBOutlet weak var button: UIButton!
    func name() -> String! {
        return value!
    }
    """
    assert check("no-implicitly-unwrapped-optional", source) == [(1, 36), (2, 22)]


def test_force_try_and_force_cast_sequences():
    assert check("no-force-try", "let data = try! load()\nlet more = try? load()\n") == [(1, 12)]
    assert check("no-force-cast", "let v = x as! Int\nlet w = x as? Int\n") == [(1, 11)]


def test_opening_brace_same_line():
    source = """
    func foo()
    {
    }
    if ready
    {
    }
    func bar() {
        run(
            { done() }
        )
    }
    """
    assert check("opening-brace-same-line", source) == [(2, 1), (5, 1)]


def test_colon_spacing():
    source = """
    let a : Int = 1
    let b:Int = 2
    let c: [String: Int] = [:]
    let d = ready ? left : right
    call(first:second)
    let s = #selector(tap(_:))
    switch value {
    case .one:
        break
    default:
        break
    }
    """
    assert check("colon-spacing", source) == [(1, 7), (2, 6), (5, 11)]


def test_redundant_self_outside_required_contexts():
    source = """
    class Counter {
        var count = 0
        init(count: Int) {
            self.count = count
        }
        func report() -> Int {
            return self.count
        }
        func later() {
            schedule { self.count += 1 }
        }
    }
    """
    assert check("redundant-self", source) == [(7, 16)]


def test_explicit_getter_on_read_only_property():
    source = """
    var area: Int {
        get {
            return 1
        }
    }
    var size: Int {
        get { return stored }
        set { stored = newValue }
    }
    """
    assert check("explicit-getter", source) == [(2, 5)]


def test_type_name_case():
    source = """
    struct myType {}
    class Good {}
    enum bad_name {}
    class func make() {}
    typealias JSON = [String: Any]
    """
    assert check("type-name-case", source) == [(1, 8), (3, 6)]


def test_member_name_case_covers_functions_properties_and_enum_cases():
    source = """
    func DoThing() {}
    let MaxCount = 1
    var my_value = 2
    enum Direction {
        case North, south
        case east(Int), West
    }
    func route(to direction: Direction) {
        switch direction {
        case .south: break
        default: break
        }
    }
    """
    assert check("member-name-case", source) == [(1, 6), (2, 5), (3, 5), (5, 10), (6, 21)]


def test_semicolons_and_invalid_characters():
    assert check("no-semicolons", "let a = 1; let b = 2\n") == [(1, 10)]
    assert check("invalid-character", "let a = 1 §\n") == [(1, 11)]


def test_chained_and_generic_bangs_are_each_reported():
    assert check("no-force-unwrap", "let v = nested!!\n") == [(1, 15), (1, 16)]
    assert check("no-implicitly-unwrapped-optional", "var d: Dictionary<String, Int>!\n") == [(1, 31)]
    assert check("no-force-unwrap", "var d: Dictionary<String, Int>!\n") == []


def test_parenthesized_argument_is_a_force_unwrap_not_a_type():
    assert check("no-implicitly-unwrapped-optional", "f(x: (a)!)\n") == []
    assert check("no-force-unwrap", "f(x: (a)!)\n") == [(1, 9)]


def test_declared_parameter_types_are_implicitly_unwrapped():
    source = """
    func configure(view: UIView!, items: [Int]!) {}
    init(delegate: Delegate!) {}
    """
    assert check("no-implicitly-unwrapped-optional", source) == [(1, 28), (1, 43), (2, 24)]


def test_opening_brace_after_collection_and_optional_return_types():
    source = """
    func f() -> [Int]
    {
        return []
    }
    func g() -> Int?
    {
        return nil
    }
    """
    assert check("opening-brace-same-line", source) == [(2, 1), (6, 1)]


def test_colon_spacing_skips_attribute_arguments_and_compound_names():
    source = """
    @objc(tableView:didSelectRowAt:)
    func select() {}
    let action = delegate.tableView(_:didSelectRowAt:)
    call(first:second)
    """
    assert check("colon-spacing", source) == [(4, 11)]


def test_prefer_let_sees_tuple_element_assignment():
    assert check("prefer-let", "var point = (0, 0)\npoint.0 = 3\n") == []


def test_member_name_case_handles_raw_values_and_wrapped_case_lists():
    source = """
    enum Code: Int {
        case a = -1, Bad
        case ok,
            Worse
    }
    """
    assert check("member-name-case", source) == [(2, 18), (4, 9)]
