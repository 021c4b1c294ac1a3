"""Tests for import specifier extraction and file resolution."""
import pytest

from actiondeps.analyzer.import_resolver import ImportResolver, is_source_file


@pytest.fixture
def resolver():
    return ImportResolver()


def test_collects_three_import_shapes(parse, resolver):
    code = '''
    import { Form } from "./Form";
    import "./side-effect";
    const helpers = require("../helpers");
    const Lazy = React.lazy(() => import("./Lazy"));
    '''
    tree, source = parse(code)
    assert resolver.extract_specifiers(tree, source) == ['./Form', './side-effect', '../helpers', './Lazy']


def test_external_packages_are_dropped(parse, resolver):
    code = '''
    import React from "react";
    import { Box } from "@chakra-ui/react";
    const lodash = require("lodash");
    import("./local");
    '''
    tree, source = parse(code)
    # '@' specifiers are kept as internal aliases, bare names dropped
    assert resolver.extract_specifiers(tree, source) == ['@chakra-ui/react', './local']


def test_non_literal_require_is_ignored(parse, resolver):
    tree, source = parse('const mod = require(moduleName);\nimport(`./pages/${name}`);')
    assert resolver.extract_specifiers(tree, source) == []


def test_alias_specifier_resolves_to_none(resolver, tmp_path):
    assert resolver.resolve('@/components/Form', tmp_path) is None


def test_external_specifier_resolves_to_none(resolver, tmp_path):
    assert resolver.resolve('react', tmp_path) is None


def test_extension_probe_order(resolver, make_tree):
    root = make_tree({
        'components/Form.ts': 'export {}',
        'components/Form.tsx': 'export {}',
        'components/Form.js': 'export {}',
    })
    assert resolver.resolve('./components/Form', root) == root / 'components' / 'Form.tsx'


def test_existing_source_extension_used_as_is(resolver, make_tree):
    root = make_tree({'components/Form.tsx': 'export {}'})
    assert resolver.resolve('./components/Form.tsx', root) == root / 'components' / 'Form.tsx'


def test_dotted_file_name_gets_extension_appended(resolver, make_tree):
    root = make_tree({'utils/date.utils.ts': 'export {}'})
    assert resolver.resolve('./utils/date.utils', root) == root / 'utils' / 'date.utils.ts'


def test_index_file_fallback(resolver, make_tree):
    root = make_tree({
        'widgets/index.js': 'export {}',
        'widgets/index.ts': 'export {}',
    })
    assert resolver.resolve('./widgets', root) == root / 'widgets' / 'index.ts'


def test_sibling_file_beats_index(resolver, make_tree):
    root = make_tree({
        'widgets.jsx': 'export {}',
        'widgets/index.tsx': 'export {}',
    })
    assert resolver.resolve('./widgets', root) == root / 'widgets.jsx'


def test_unresolvable_relative_path_returned_unchanged(resolver, tmp_path):
    base = tmp_path / 'pages'
    assert resolver.resolve('../utils/missing', base) == (tmp_path / 'utils' / 'missing').resolve()


def test_resolve_imports_deduplicates(parse, resolver, make_tree):
    root = make_tree({'Form.tsx': 'export {}'})
    tree, source = parse('import { A } from "./Form";\nimport { B } from "./Form.tsx";\nimport x from "@/alias";')
    assert resolver.resolve_imports(tree, source, root) == [root / 'Form.tsx']


@pytest.mark.parametrize("path, expected", [
    ('a.tsx', True), ('a.ts', True), ('a.jsx', True), ('a.js', True),
    ('a.css', False), ('a', False), ('a.json', False),
])
def test_is_source_file(path, expected):
    assert is_source_file(path) is expected


def test_probed_symlink_is_resolved(resolver, make_tree):
    root = make_tree({'components/Real.tsx': 'export {}'})
    (root / 'components' / 'Link.tsx').symlink_to(root / 'components' / 'Real.tsx')

    assert resolver.resolve('./components/Link', root) == root / 'components' / 'Real.tsx'
