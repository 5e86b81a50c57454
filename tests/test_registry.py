# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for ObjectRegistry."""

import gc

import pytest

from genro_resources import ObjectRegistry


class Widget:
    """Weak-referenceable object with value equality."""

    def __init__(self, label='w'):
        self.label = label

    def __eq__(self, other):
        return isinstance(other, Widget) and other.label == self.label

    __hash__ = None


class TestRegistration:
    """Tests for register, name_of and object_at."""

    def test_register_both_directions(self):
        """Test registering records object->name and name->object."""
        registry = ObjectRegistry()
        frame = Widget()
        registry.register(frame, 'application.frame')
        assert registry.name_of(frame) == 'application.frame'
        assert registry.object_at('application.frame') is frame
        assert len(registry) == 1

    def test_unknown(self):
        """Test unknown objects and names give None."""
        registry = ObjectRegistry()
        assert registry.name_of(Widget()) is None
        assert registry.object_at('nothing') is None

    def test_reregister_replaces_name(self):
        """Test a second registration replaces the object's name."""
        registry = ObjectRegistry()
        frame = Widget()
        registry.register(frame, 'first')
        registry.register(frame, 'second')
        assert registry.name_of(frame) == 'second'
        assert registry.object_at('second') is frame
        assert registry.object_at('first') is None
        assert len(registry) == 1

    def test_first_object_keeps_name(self):
        """Test only the first object registered under a name is reachable."""
        registry = ObjectRegistry()
        first, second = Widget('a'), Widget('b')
        registry.register(first, 'shared')
        registry.register(second, 'shared')
        assert registry.object_at('shared') is first
        assert registry.name_of(second) == 'shared'

    def test_identity_not_equality(self):
        """Test equal but distinct objects are distinct entries."""
        registry = ObjectRegistry()
        first, twin = Widget('same'), Widget('same')
        registry.register(first, 'first')
        assert registry.name_of(twin) is None

    def test_not_weakrefable(self):
        """Test objects without weak reference support are refused."""
        registry = ObjectRegistry()
        with pytest.raises(TypeError, match="weak references"):
            registry.register(42, 'answer')
        assert len(registry) == 0

    def test_strong_registration(self):
        """Test weak=False accepts objects without weak reference support."""
        registry = ObjectRegistry()
        settings = {'k': 1}
        registry.register(settings, 'settings', weak=False)
        assert registry.name_of(settings) == 'settings'
        assert registry.object_at('settings') is settings
        registry.unregister(settings)
        assert registry.object_at('settings') is None
        assert len(registry) == 0


class TestUnregistration:
    """Tests for unregister and clear."""

    def test_unregister(self):
        """Test unregister removes both directions."""
        registry = ObjectRegistry()
        frame = Widget()
        registry.register(frame, 'frame')
        registry.unregister(frame)
        assert registry.name_of(frame) is None
        assert registry.object_at('frame') is None

    def test_unregister_unknown_is_noop(self):
        """Test unregistering an unknown object does nothing."""
        registry = ObjectRegistry()
        registry.unregister(Widget())
        assert len(registry) == 0

    def test_unregister_keeps_other_owner(self):
        """Test the name side is kept when it points at another object."""
        registry = ObjectRegistry()
        first, second = Widget('a'), Widget('b')
        registry.register(first, 'shared')
        registry.register(second, 'shared')
        registry.unregister(second)
        assert registry.object_at('shared') is first
        registry.unregister(first)
        assert registry.object_at('shared') is None

    def test_clear(self):
        """Test clear drops every registration."""
        registry = ObjectRegistry()
        frame = Widget()
        registry.register(frame, 'frame')
        registry.clear()
        assert len(registry) == 0
        assert registry.object_at('frame') is None


class TestWeakOwnership:
    """Tests that the registry does not keep objects alive."""

    def test_collected_object_disappears(self):
        """Test entries vanish when the object is garbage collected."""
        registry = ObjectRegistry()
        frame = Widget()
        registry.register(frame, 'frame')
        del frame
        gc.collect()
        assert registry.object_at('frame') is None
        assert len(registry) == 0

    def test_name_freed_for_next_object(self):
        """Test a collected owner frees its name for a new object."""
        registry = ObjectRegistry()
        old = Widget('old')
        registry.register(old, 'frame')
        del old
        gc.collect()
        new = Widget('new')
        registry.register(new, 'frame')
        assert registry.object_at('frame') is new

    def test_collection_keeps_other_entries(self):
        """Test collecting one object leaves the other registrations intact."""
        registry = ObjectRegistry()
        keep, other = Widget('keep'), Widget('other')
        gone = Widget('gone')
        registry.register(keep, 'shared')
        registry.register(gone, 'shared')
        registry.register(other, 'other')
        del gone
        gc.collect()
        assert len(registry) == 2
        assert registry.object_at('shared') is keep
        assert registry.object_at('other') is other
        assert registry.name_of(keep) == 'shared'

    def test_collected_after_rename(self):
        """Test a renamed object releases only its current name when collected."""
        registry = ObjectRegistry()
        frame = Widget()
        registry.register(frame, 'first')
        registry.register(frame, 'second')
        del frame
        gc.collect()
        assert registry.object_at('first') is None
        assert registry.object_at('second') is None
        assert len(registry) == 0
