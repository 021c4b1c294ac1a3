"""Tests for action-call extraction."""
import pytest

from actiondeps.analyzer.extractor import ActionCallExtractor, decode_escape, extract_dependencies


@pytest.fixture
def extract(parse):
    def _extract(code: str, target_type: str = 'action', file_name: str = 'snippet.ts'):
        tree, source = parse(code, file_name)
        return extract_dependencies(tree, source, target_type)
    return _extract


def test_no_calls_yields_empty_list(extract):
    assert extract('const answer = 42;\nfunction noop() {}\n') == []


def test_literal_calls_in_call_order_without_duplicates(extract):
    code = '''
    await executeAction("list-users");
    await executeAction("get-user", { id: 1 });
    await executeAction("list-users");
    '''
    assert extract(code) == ['list-users', 'get-user']


def test_single_quoted_literal(extract):
    assert extract("executeAction('update-user-settings', {});") == ['update-user-settings']


def test_variable_alias_matches_literal(extract):
    via_alias = extract('const actionName = "foo";\nexecuteAction(actionName);')
    via_literal = extract('executeAction("foo");')
    assert via_alias == via_literal == ['foo']


def test_alias_declared_with_let_and_type_annotation(extract):
    assert extract('let target: string = "bar";\nexecuteAction(target);') == ['bar']


def test_alias_must_be_declared_before_use(extract):
    code = 'executeAction(later);\nvar later = "too-late";'
    assert extract(code) == []


def test_reassignment_after_declaration_not_tracked(extract):
    code = 'let name = "first";\nname = "second";\nexecuteAction(name);'
    assert extract(code) == ['first']


def test_unbound_identifier_yields_nothing(extract):
    assert extract('executeAction(unknownName);') == []


@pytest.mark.parametrize("argument", [
    '`dynamic-${id}`',
    'config.actionName',
    '"prefix-" + suffix',
    'getActionName()',
])
def test_dynamic_arguments_are_skipped(extract, argument):
    assert extract(f'executeAction({argument});') == []


def test_call_without_arguments(extract):
    assert extract('executeAction();') == []


def test_member_call_is_not_a_trigger(extract):
    assert extract('client.executeAction("remote");') == []


def test_hooks_only_count_in_view_mode(extract):
    code = '''
    const { data } = useExecuteAction("get-products");
    const [run] = useExecuteActionLazy("get-users");
    executeAction("update-category");
    '''
    assert extract(code, 'action', 'page.tsx') == ['update-category']
    assert extract(code, 'view', 'page.tsx') == ['get-products', 'get-users', 'update-category']


def test_nested_calls_inside_jsx_handlers(extract):
    code = '''
    export const Button = () => (
        <button onClick={() => executeAction("click-action")}>Go</button>
    );
    '''
    assert extract(code, 'view', 'Button.tsx') == ['click-action']


def test_comment_before_argument_is_ignored(extract):
    assert extract('executeAction(/* which */ "commented");') == ['commented']


def test_unknown_target_type_raises():
    with pytest.raises(ValueError):
        ActionCallExtractor('backend')


def test_escaped_quotes_are_decoded(extract):
    code = 'executeAction("a\\"b");\nexecuteAction(\'it\\\'s\');'
    assert extract(code) == ['a"b', "it's"]


def test_escaped_alias_binding_is_decoded(extract):
    assert extract('const name = "get\\x2Dusers";\nexecuteAction(name);') == ['get-users']


@pytest.mark.parametrize("sequence, expected", [
    ('\\n', '\n'),
    ('\\\\', '\\'),
    ('\\"', '"'),
    ('\\x41', 'A'),
    ('\\u00e9', 'é'),
    ('\\u{1F600}', '\U0001F600'),
    ('\\0', '\0'),
    ('\\101', 'A'),
    ('\\q', 'q'),
    ('\\\n', ''),
])
def test_decode_escape(sequence, expected):
    assert decode_escape(sequence) == expected
