# SPDX-License-Identifier: MIT
"""Unit tests for RepositoryRegistry and the default registry."""

import threading

import pytest

from urirepo import registry as registry_module
from urirepo.errors import UnsupportedSchemeError
from urirepo.registry import RepositoryRegistry, for_uri, get_registry, register, reset_registry
from urirepo.repository.memory import MemoryRepository
from urirepo.repository.protocol import Repository
from urirepo.uri import parse_uri

# ------------------------------------------------------------------
# RepositoryRegistry
# ------------------------------------------------------------------


@pytest.mark.unit
class TestRegistry:
    def test_lookup_returns_same_instance(self, registry, memory_repo):
        assert registry.for_uri(parse_uri("mem://foo")) is memory_repo

    def test_lookup_accepts_string(self, registry, memory_repo):
        assert registry.for_uri("mem:///foo") is memory_repo

    def test_unknown_scheme_raises(self, registry):
        with pytest.raises(UnsupportedSchemeError, match="'file'") as exc_info:
            registry.for_uri("file:///etc/hosts")
        assert exc_info.value.scheme == "file"

    def test_unsupported_scheme_is_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.for_uri("s3://bucket/key")

    def test_empty_registry(self):
        with pytest.raises(UnsupportedSchemeError):
            RepositoryRegistry().for_uri("mem:///foo")

    def test_schemes_sorted(self, registry):
        registry.register("zip", MemoryRepository("zip"))
        registry.register("arc", MemoryRepository("arc"))
        assert registry.schemes() == ["arc", "mem", "zip"]

    def test_scheme_match_is_case_sensitive(self):
        reg = RepositoryRegistry()
        upper = MemoryRepository("MEM")
        reg.register("MEM", upper)
        assert reg.schemes() == ["MEM"]
        with pytest.raises(UnsupportedSchemeError, match="'mem'"):
            reg.for_uri("MEM:///foo")

    def test_repr(self, registry):
        assert repr(registry) == "RepositoryRegistry(schemes=['mem'])"


@pytest.mark.unit
class TestReregistration:
    def test_replacement_affects_future_lookups(self, registry, memory_repo):
        replacement = MemoryRepository("mem")
        registry.register("mem", replacement)
        assert replacement is not memory_repo
        assert registry.for_uri("mem://foo") is replacement

    def test_old_instance_keeps_its_data(self):
        reg = RepositoryRegistry()
        a = MemoryRepository("mem")
        reg.register("mem", a)
        foo = parse_uri("mem:///foo")
        with reg.for_uri(foo).writer(foo) as w:
            w.write(b"kept")

        b = MemoryRepository("mem")
        reg.register("mem", b)

        resolved = reg.for_uri(parse_uri("mem://foo"))
        assert resolved is b
        assert not b.exists(foo)
        assert a.exists(foo)
        assert a.reader(foo).read() == b"kept"

    def test_replacement_calls_destroy_on_previous(self, registry, memory_repo, mocker):
        spy = mocker.spy(memory_repo, "destroy")
        registry.register("mem", MemoryRepository("mem"))
        spy.assert_called_once_with("mem")

    def test_registering_same_instance_does_not_destroy(self, registry, memory_repo, mocker):
        spy = mocker.spy(memory_repo, "destroy")
        registry.register("mem", memory_repo)
        spy.assert_not_called()

    def test_one_repository_under_several_schemes(self, registry, memory_repo):
        registry.register("ram", memory_repo)
        assert registry.for_uri("ram:///bar") is registry.for_uri("mem:///bar")


@pytest.mark.unit
class TestUnregister:
    def test_unregister(self, registry, memory_repo, mocker):
        spy = mocker.spy(memory_repo, "destroy")
        registry.unregister("mem")
        spy.assert_called_once_with("mem")
        with pytest.raises(UnsupportedSchemeError):
            registry.for_uri("mem:///foo")

    def test_unregister_unknown_is_noop(self, registry):
        registry.unregister("nope")
        assert registry.schemes() == ["mem"]

    def test_close_unregisters_everything(self, registry, memory_repo, mocker):
        other = MemoryRepository("tmp")
        registry.register("tmp", other)
        spy = mocker.spy(other, "destroy")
        registry.close()
        assert registry.schemes() == []
        spy.assert_called_once_with("tmp")
        # data survives for anyone still holding the instance
        assert memory_repo.exists(parse_uri("mem:///bar"))


class _PlainRepository:
    """Implements the repository operations and nothing else."""

    def exists(self, uri):
        return False

    def can_read(self, uri):
        return False

    def can_write(self, uri):
        return True

    def reader(self, uri):
        raise NotImplementedError

    def writer(self, uri):
        raise NotImplementedError

    def delete(self, uri):
        pass

    def parent(self, uri):
        return uri

    def child(self, uri, name):
        return uri


class _FailingDestroyRepository(MemoryRepository):
    def destroy(self, scheme):
        raise RuntimeError("destroy failed")


@pytest.mark.unit
class TestDestroyHook:
    def test_plain_repository_satisfies_protocol(self):
        assert isinstance(_PlainRepository(), Repository)

    def test_replacing_repository_without_hook(self):
        reg = RepositoryRegistry()
        reg.register("x", _PlainRepository())
        replacement = MemoryRepository("x")
        reg.register("x", replacement)
        assert reg.for_uri("x:///a") is replacement

    def test_unregistering_repository_without_hook(self):
        reg = RepositoryRegistry()
        reg.register("x", _PlainRepository())
        reg.unregister("x")
        assert reg.schemes() == []

    def test_failing_hook_does_not_break_register(self, caplog):
        reg = RepositoryRegistry()
        reg.register("mem", _FailingDestroyRepository("mem"))
        replacement = MemoryRepository("mem")

        reg.register("mem", replacement)

        assert reg.for_uri("mem:///foo") is replacement
        assert "destroy hook" in caplog.text
        assert "destroy failed" in caplog.text

    def test_failing_hook_does_not_break_unregister_or_close(self):
        reg = RepositoryRegistry()
        reg.register("a", _FailingDestroyRepository("a"))
        reg.register("b", _FailingDestroyRepository("b"))
        reg.unregister("a")
        reg.close()
        assert reg.schemes() == []


@pytest.mark.unit
def test_concurrent_register_and_lookup():
    reg = RepositoryRegistry()
    repos = [MemoryRepository("mem") for _ in range(20)]
    reg.register("mem", repos[0])
    errors: list[AssertionError] = []

    def _register(repo):
        for _ in range(50):
            reg.register("mem", repo)

    def _lookup():
        try:
            for _ in range(500):
                assert reg.for_uri("mem:///foo") in repos
        except AssertionError as e:
            errors.append(e)

    threads = [threading.Thread(target=_register, args=(r,)) for r in repos]
    threads += [threading.Thread(target=_lookup) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert reg.schemes() == ["mem"]


# ------------------------------------------------------------------
# Default registry
# ------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.usefixtures("clean_default_registry")
class TestDefaultRegistry:
    def test_cached_singleton(self):
        assert get_registry() is get_registry()

    def test_bootstraps_mem_by_default(self, monkeypatch):
        monkeypatch.delenv("URIREPO_MEMORY_SCHEMES", raising=False)
        reset_registry()
        assert isinstance(for_uri("mem:///foo"), MemoryRepository)

    def test_bootstraps_configured_schemes(self, monkeypatch):
        monkeypatch.setenv("URIREPO_MEMORY_SCHEMES", "ram, tmp")
        reset_registry()
        reg = get_registry()
        assert reg.schemes() == ["ram", "tmp"]
        assert reg.for_uri("ram:///x") is not reg.for_uri("tmp:///x")

    def test_empty_configuration_registers_nothing(self, monkeypatch):
        monkeypatch.setenv("URIREPO_MEMORY_SCHEMES", "")
        reset_registry()
        with pytest.raises(UnsupportedSchemeError):
            for_uri("mem:///foo")

    def test_module_level_register(self):
        repo = MemoryRepository("mem")
        register("mem", repo)
        assert for_uri("mem://foo") is repo

    def test_reset_builds_fresh_registry(self, mocker):
        first = get_registry()
        repo = first.for_uri("mem:///")
        spy = mocker.spy(repo, "destroy")
        reset_registry()
        assert first.schemes() == []
        spy.assert_called_once_with("mem")
        assert get_registry() is not first

    def test_atexit_hook_registered(self, mocker):
        mock_register = mocker.patch.object(registry_module.atexit, "register")
        reg = get_registry()
        mock_register.assert_called_once_with(reg.close)

    def test_reset_without_registry_is_noop(self):
        reset_registry()
        reset_registry()
