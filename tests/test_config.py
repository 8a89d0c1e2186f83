from datetime import timedelta
from pathlib import Path

from tikvkit.config import Config


def test_default_has_no_security_and_two_second_timeout():
    config = Config()
    assert config.ca_path is None
    assert config.cert_path is None
    assert config.key_path is None
    assert config.timeout == timedelta(seconds=2)


def test_with_security_sets_paths():
    config = Config().with_security("root.ca", "internal.cert", "internal.key")
    assert config.ca_path == Path("root.ca")
    assert config.cert_path == Path("internal.cert")
    assert config.key_path == Path("internal.key")
    assert config.timeout == Config().timeout


def test_with_security_leaves_original_untouched():
    base = Config()
    base.with_security("root.ca", "internal.cert", "internal.key")
    assert base == Config()


def test_with_timeout():
    timeout = timedelta(seconds=10)
    config = Config().with_timeout(timeout)
    assert config.timeout == timeout
    assert config.ca_path is None


def test_chaining_keeps_both_settings():
    timeout = timedelta(seconds=5)
    config = Config().with_timeout(timeout).with_security("a", "b", "c")
    assert config.timeout == timeout
    assert config.key_path == Path("c")