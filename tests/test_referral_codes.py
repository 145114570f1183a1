from __future__ import annotations

import pytest

from levefit.core.referral_codes import ALPHABET, generate_referral_code, normalize_referral_code


def test_generate_referral_code_has_prefix_length_and_charset() -> None:
    code = generate_referral_code()
    assert code.startswith("LF")
    assert len(code) == 8
    assert set(code[2:]).issubset(set(ALPHABET))


def test_generate_referral_code_supports_custom_prefix() -> None:
    code = generate_referral_code(5, prefix="AF")
    assert code.startswith("AF")
    assert len(code) == 7


def test_generate_referral_code_rejects_non_positive_length() -> None:
    with pytest.raises(ValueError):
        generate_referral_code(0)


def test_normalize_referral_code_uppercases_and_strips() -> None:
    assert normalize_referral_code("  lfabc234 ") == "LFABC234"
    assert normalize_referral_code("   ") is None
    assert normalize_referral_code(None) is None
