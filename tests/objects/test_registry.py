"""Tests for the path-keyed Registry."""

import threading

import pytest

from docobjects.config import RegistryConfig
from docobjects.exceptions import EntityNotFoundError
from docobjects.objects import MethodEntity, NamespaceEntity, Registry, Scope


class TestRegisterLookup:
    def test_round_trip(self, registry, foo):
        assert registry.lookup("Foo") is foo

    def test_missing_path_reports_absence(self, registry):
        assert registry.lookup("Nope") is None
        assert "Nope" not in registry

    def test_empty_path_is_root(self, registry):
        assert registry.lookup("") is registry.root
        assert registry.root.path == ""
        # Root answers lookup but holds no key
        assert len(registry) == 0

    def test_last_write_wins(self, registry, foo):
        first = MethodEntity(foo, "run")
        registry.register(first)
        again = MethodEntity(foo, "run")
        registry.register(again)
        assert registry.lookup("Foo#run") is again
        assert len(registry.paths()) == 2

    def test_reregistering_same_entity_is_harmless(self, registry, foo):
        registry.register(foo)
        registry.register(foo)
        assert registry.paths() == ["Foo"]

    def test_foreign_entity_rejected(self, registry):
        other = Registry()
        stranger = NamespaceEntity(other.root, "Stranger")
        with pytest.raises(ValueError):
            registry.register(stranger)

    def test_at_raises_when_absent(self, registry):
        with pytest.raises(EntityNotFoundError) as exc_info:
            registry.at("Foo#missing")
        assert exc_info.value.path == "Foo#missing"

    def test_is_registered(self, registry, foo):
        method = MethodEntity(foo, "run")
        assert not registry.is_registered(method)
        registry.register(method)
        assert registry.is_registered(method)
        assert method.is_registered()

    def test_root_is_never_registered(self, registry):
        assert registry.lookup("") is registry.root
        assert not registry.is_registered(registry.root)
        assert not registry.root.is_registered()


class TestDelete:
    def test_delete_removes_entry(self, registry, foo):
        registry.delete(foo)
        assert registry.lookup("Foo") is None

    def test_delete_twice_is_noop(self, registry, foo, make_method):
        make_method(foo, "run")
        registry.delete(foo)
        registry.delete(foo)
        assert registry.paths() == ["Foo#run"]

    def test_delete_leaves_other_occupant(self, registry, foo):
        occupant = MethodEntity(foo, "run")
        registry.register(occupant)
        impostor = MethodEntity(foo, "run")
        registry.delete(impostor)
        assert registry.lookup("Foo#run") is occupant

    def test_delete_unregistered_entity(self, registry, foo):
        never = MethodEntity(foo, "never")
        registry.delete(never)
        assert registry.paths() == ["Foo"]

    def test_delete_drops_namespace_member(self, registry, foo, make_method):
        run = make_method(foo, "run")
        registry.delete(run)
        assert foo.meths() == []
        assert foo.child("run") is None

    def test_register_after_delete_restores_member(self, registry, foo, make_method):
        run = make_method(foo, "run")
        registry.delete(run)
        registry.register(run)
        assert foo.child("run") is run
        assert foo.meths() == [run]

    def test_rescoping_deleted_method_keeps_it_out(self, registry, foo, make_method):
        run = make_method(foo, "run")
        registry.delete(run)
        run.set_scope("class")
        assert foo.meths() == []
        assert registry.paths() == ["Foo"]

    def test_delete_top_level_method(self, registry, make_method):
        run = make_method(registry.root, "run")
        registry.delete(run)
        assert registry.root.meths() == []


class TestQueries:
    def test_all_filters_by_type_tag_and_class(self, registry, foo, make_method):
        run = make_method(foo, "run")
        assert set(registry.all()) == {foo, run}
        assert registry.all("method") == [run]
        assert registry.all(NamespaceEntity) == [foo]
        assert set(registry.all("method", "namespace")) == {foo, run}

    def test_iteration_and_len(self, registry, foo, make_method):
        make_method(foo, "run")
        assert len(registry) == 2
        assert {e.path for e in registry} == {"Foo", "Foo#run"}

    def test_clear(self, registry, foo):
        old_root = registry.root
        registry.clear()
        assert len(registry) == 0
        assert registry.root is not old_root
        assert registry.root.children == []


class TestResolve:
    def test_resolves_in_enclosing_namespace(self, registry, foo, make_method):
        bar = NamespaceEntity(foo, "Bar")
        registry.register(bar)
        run = make_method(foo, "run")
        assert registry.resolve(bar, "run") is run

    def test_nearest_namespace_wins(self, registry, foo, make_method):
        bar = NamespaceEntity(foo, "Bar")
        registry.register(bar)
        make_method(foo, "run")
        inner = make_method(bar, "run")
        assert registry.resolve(bar, "run") is inner

    def test_absolute_path(self, registry, foo):
        bar = NamespaceEntity(foo, "Bar")
        registry.register(bar)
        assert registry.resolve(bar, "Foo::Bar") is bar
        assert registry.resolve(None, "Foo::Bar") is bar

    def test_explicit_separator_prefix(self, registry, foo, make_method):
        build = make_method(foo, "build", scope="class")
        run = make_method(foo, "run")
        assert registry.resolve(foo, ".build") is build
        assert registry.resolve(foo, "#run") is run

    def test_top_level_methods(self, registry, make_method):
        run = make_method(registry.root, "run")
        assert registry.resolve(None, "run") is run

    def test_unresolvable(self, registry, foo):
        assert registry.resolve(foo, "nothing") is None

    def test_detached_namespace_sees_root(self, registry, foo):
        loose = NamespaceEntity(None, "Loose", registry=registry)
        assert registry.resolve(loose, "Foo") is foo


class TestRekey:
    def test_registered_entity_moves(self, registry, foo, make_method):
        method = make_method(foo, "run")
        with registry.rekey(method):
            method._scope = Scope.CLASS
        assert registry.lookup("Foo#run") is None
        assert registry.lookup("Foo.run") is method

    def test_failed_body_restores_old_key(self, registry, foo, make_method):
        method = make_method(foo, "run")
        with pytest.raises(RuntimeError):
            with registry.rekey(method):
                assert registry.lookup("Foo#run") is None
                raise RuntimeError("boom")
        assert registry.lookup("Foo#run") is method

    def test_unregistered_entity_stays_out(self, registry, foo):
        method = MethodEntity(foo, "run")
        with registry.rekey(method):
            pass
        assert registry.lookup("Foo#run") is None


class TestConfiguredSeparators:
    def test_paths_follow_config(self):
        registry = Registry(RegistryConfig(namespace_separator="/", class_method_separator="::",
                                           instance_separator="."))
        outer = NamespaceEntity(registry.root, "a")
        inner = NamespaceEntity(outer, "b")
        method = MethodEntity(inner, "go", scope="class")
        registry.register(method)
        assert inner.path == "a/b"
        assert registry.lookup("a/b::go") is method


def test_concurrent_rekeys_small(registry, foo):
    """Quick variant of the stress test below, run on every invocation."""
    methods = [MethodEntity(foo, f"m{i}") for i in range(8)]
    for method in methods:
        registry.register(method)

    def flip(method):
        for n in range(51):
            method.set_scope("class" if n % 2 == 0 else "instance")

    threads = [threading.Thread(target=flip, args=(m,)) for m in methods]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry) == 9
    for method in methods:
        assert method.scope is Scope.CLASS
        assert registry.lookup(method.path) is method
        assert registry.lookup(f"Foo#{method.name}") is None
        assert foo.child(method.name, "class") is method


@pytest.mark.slow
def test_concurrent_rekeys_keep_invariant(registry, foo):
    methods = [MethodEntity(foo, f"m{i}") for i in range(50)]
    for method in methods:
        registry.register(method)

    def flip(method):
        for n in range(200):
            method.set_scope("class" if n % 2 == 0 else "instance")

    threads = [threading.Thread(target=flip, args=(m,)) for m in methods]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry) == 51
    for method in methods:
        assert registry.lookup(method.path) is method
