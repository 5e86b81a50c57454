# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for ResourceNode, its child indices and the type hierarchies."""

from genro_resources import (
    DeclaredTypeHierarchy,
    PythonTypeHierarchy,
    ResourceNode,
)
from genro_resources.node import SingleMatchIndex, TypeIndex


class Component:
    pass


class Container(Component):
    pass


class Window(Container):
    pass


class Frame(Window):
    pass


class TestResourceNode:
    """Tests for ResourceNode."""

    def test_create_root(self):
        """Test root node defaults."""
        root = ResourceNode('root')
        assert root.name == 'root'
        assert root.abs_name is None
        assert root.value is None
        assert root.has_value is False

    def test_child_absolute_names(self):
        """Test absolute names for tight and loose children."""
        root = ResourceNode('root')
        frame = root.create_child('frame', loose=False)
        assert frame.abs_name == 'frame'
        assert root.create_child('frame', loose=True).abs_name == '*frame'
        assert frame.create_child('a', loose=False).abs_name == 'frame.a'
        assert frame.create_child('Button', loose=True).abs_name == 'frame*Button'

    def test_create_child_reuses_existing(self):
        """Test creating the same child twice returns the same node."""
        root = ResourceNode('root')
        first = root.create_child('frame', loose=False)
        assert root.create_child('frame', loose=False) is first
        assert root.create_child('frame', loose=True) is not first

    def test_create_child_updates_path_index(self):
        """Test new nodes are recorded by absolute name."""
        paths = {}
        root = ResourceNode('root')
        node = root.create_child('frame', loose=False, paths=paths)
        child = node.create_child('a', loose=False, paths=paths)
        assert paths == {'frame': node, 'frame.a': child}

    def test_exact_child_by_category(self):
        """Test exact lookup uses the segment's category."""
        root = ResourceNode('root')
        named = root.create_child('frame', loose=False)
        typed = root.create_child('Frame', loose=False)
        assert root.exact_child('frame', loose=False) is named
        assert root.exact_child('Frame', loose=False) is typed
        assert root.exact_child('frame', loose=True) is None
        assert root.exact_child('other', loose=False) is None

    def test_single_match_child(self):
        """Test the '?' child is found whatever the segment."""
        root = ResourceNode('root')
        assert root.single_match_child(loose=False) is None
        wildcard = root.create_child('?', loose=False)
        assert root.single_match_child(loose=False) is wildcard
        assert root.exact_child('?', loose=False) is wildcard

    def test_type_child_walks_ancestry(self):
        """Test type lookup falls back to declared ancestors."""
        hierarchy = DeclaredTypeHierarchy()
        hierarchy.declare('Component')
        hierarchy.declare('Frame', superclass='Component')
        root = ResourceNode('root')
        component = root.create_child('Component', loose=True)
        assert root.type_child('Frame', loose=True, hierarchy=hierarchy) is component
        assert root.type_child('Frame', loose=False, hierarchy=hierarchy) is None

    def test_dump_order(self):
        """Test dump lists tight children before loose, by category."""
        root = ResourceNode('root')
        root.create_child('z', loose=True).value = '1'
        a = root.create_child('a', loose=False)
        a.value = '2'
        a.create_child('?', loose=False).value = '3'
        a.create_child('Kind', loose=False).value = '4'
        a.create_child('name', loose=False).value = '5'
        a.create_child('deep', loose=True).value = '6'
        assert list(root.dump_lines()) == [
            'a: 2',
            'a.name: 5',
            'a.Kind: 4',
            'a.?: 3',
            'a*deep: 6',
            '*z: 1',
        ]

    def test_repr(self):
        """Test string representation."""
        node = ResourceNode('a', 'frame.a')
        node.value = 'x'
        assert 'frame.a' in repr(node)
        assert "'x'" in repr(node)


class TestIndices:
    """Tests for the by-type and single-match indices."""

    def test_single_match_last_write_wins(self):
        """Test every key routes to the same slot."""
        index = SingleMatchIndex()
        assert len(index) == 0
        assert index.get('anything') is None
        index['x'] = 1
        index['y'] = 2
        assert index.get('z') == 2
        assert index.values() == [2]
        assert len(index) == 1

    def test_type_index_exact(self):
        """Test exact names are found without walking."""
        index = TypeIndex(Frame='frame-node')
        assert index.find('Frame', DeclaredTypeHierarchy()) == 'frame-node'

    def test_type_index_missing(self):
        """Test an exhausted hierarchy yields None."""
        index = TypeIndex(Window='window-node')
        assert index.find('Frame', DeclaredTypeHierarchy()) is None


class TestPythonTypeHierarchy:
    """Tests for the MRO-based hierarchy."""

    def test_class_name(self):
        """Test dots of module and qualname become slashes."""
        name = PythonTypeHierarchy.class_name(Frame)
        assert name.endswith('/Frame')
        assert '.' not in name

    def test_type_name_and_ancestors(self):
        """Test ancestry follows the MRO, full names before bare names."""
        hierarchy = PythonTypeHierarchy()
        name = hierarchy.type_name(Frame())
        assert name == PythonTypeHierarchy.class_name(Frame)
        ancestors = hierarchy.ancestors(name)
        assert ancestors[0] == 'Frame'
        assert ancestors.index(PythonTypeHierarchy.class_name(Window)) < ancestors.index('Window')
        assert ancestors.index('Window') < ancestors.index('Container')
        assert ancestors.index('Container') < ancestors.index('Component')
        assert name not in ancestors

    def test_bare_name_is_walkable(self):
        """Test a bare class name has an ancestry once the class is known."""
        hierarchy = PythonTypeHierarchy()
        hierarchy.remember(Frame)
        assert 'Window' in hierarchy.ancestors('Frame')

    def test_unknown_name(self):
        """Test unknown names have no ancestry."""
        assert PythonTypeHierarchy().ancestors('Unknown') == []


class TestDeclaredTypeHierarchy:
    """Tests for the explicit hierarchy."""

    def test_interfaces_then_superclass(self):
        """Test each level offers interfaces before the superclass."""
        hierarchy = DeclaredTypeHierarchy()
        hierarchy.declare('Component', interfaces=['ImageObserver'])
        hierarchy.declare('Container', superclass='Component')
        hierarchy.declare('Frame', superclass='Container', interfaces=['MenuContainer'])
        assert hierarchy.ancestors('Frame') == [
            'MenuContainer', 'Container', 'Component', 'ImageObserver',
        ]
        assert 'Frame' in hierarchy
        assert 'Panel' not in hierarchy

    def test_cycles_terminate(self):
        """Test a cyclic declaration does not loop forever."""
        hierarchy = DeclaredTypeHierarchy()
        hierarchy.declare('A', superclass='B')
        hierarchy.declare('B', superclass='A')
        assert hierarchy.ancestors('A') == ['B']

    def test_type_name(self):
        """Test objects are named by resource_type or class name."""
        hierarchy = DeclaredTypeHierarchy()

        class Widget:
            resource_type = 'awt/Button'

        assert hierarchy.type_name(Widget()) == 'awt/Button'
        assert hierarchy.type_name(Frame()) == 'Frame'
