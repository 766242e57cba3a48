"""Tests for pod name validation."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kubets.engine.validation import is_valid_pod_name, validate_pod_name
from kubets.errors import InvalidPodNameFormatError

_ALNUM = "abcdefghijklmnopqrstuvwxyz0123456789"


class TestValidNames:
    @pytest.mark.parametrize("name", ["my-app-1", "a", "0", "web-1", "db-0-a1b2c", "a--b"])
    def test_accepts(self, name: str) -> None:
        validate_pod_name(name)
        assert is_valid_pod_name(name) is True

    def test_does_not_enforce_dns_length_limit(self) -> None:
        name = "a" * 300
        validate_pod_name(name)


class TestInvalidNames:
    @pytest.mark.parametrize("name", ["-bad", "bad-", "", "UP", "My-App", "my_app", "my.app", "app ", "-"])
    def test_rejects(self, name: str) -> None:
        assert is_valid_pod_name(name) is False
        with pytest.raises(InvalidPodNameFormatError) as exc_info:
            validate_pod_name(name)
        assert exc_info.value.name == name
        assert exc_info.value.code == "INVALID_POD_NAME"

    def test_empty_name_message(self) -> None:
        with pytest.raises(InvalidPodNameFormatError, match="must not be empty"):
            validate_pod_name("")


class TestProperties:
    @given(
        head=st.sampled_from(_ALNUM),
        middle=st.text(alphabet=_ALNUM + "-", max_size=40),
        tail=st.sampled_from(_ALNUM),
    )
    def test_well_formed_names_pass(self, head: str, middle: str, tail: str) -> None:
        assert is_valid_pod_name(head + middle + tail)

    @given(st.text(alphabet=_ALNUM + "-", max_size=40))
    def test_leading_hyphen_always_fails(self, rest: str) -> None:
        assert not is_valid_pod_name("-" + rest)

    @given(
        prefix=st.text(alphabet=_ALNUM + "-", max_size=20),
        upper=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
        suffix=st.text(alphabet=_ALNUM + "-", max_size=20),
    )
    def test_uppercase_always_fails(self, prefix: str, upper: str, suffix: str) -> None:
        assert not is_valid_pod_name(prefix + upper + suffix)
