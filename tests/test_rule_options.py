from __future__ import annotations

from config_engine.rule_options import SemicolonRuleOptionCodec


def test_decode_infers_types_in_order() -> None:
    codec = SemicolonRuleOptionCodec()
    assert codec.decode("3;TRUE;0.5;abc;false") == (3, True, 0.5, "abc", False)


def test_decode_empty_text_is_empty_tuple() -> None:
    assert SemicolonRuleOptionCodec().decode("") == ()


def test_encode_writes_lowercase_booleans() -> None:
    assert SemicolonRuleOptionCodec().encode((3, False, "x", 1.5)) == "3;false;x;1.5"


def test_decode_rejects_loose_number_forms() -> None:
    codec = SemicolonRuleOptionCodec()
    assert codec.decode("+5;1_0; 7;-3;1e-05") == ("+5", "1_0", " 7", -3, 1e-05)


def test_strings_with_list_delimiters_are_escaped() -> None:
    codec = SemicolonRuleOptionCodec()
    text = codec.encode(("a,b", "x:y", "p;q"))
    assert "," not in text
    assert ":" not in text
    assert text.count(";") == 2
    assert codec.decode(text) == ("a,b", "x:y", "p;q")


def test_strings_that_look_like_other_types_keep_their_type() -> None:
    codec = SemicolonRuleOptionCodec()
    values = ("5", "true", "0.5", "", "__str__x", 5, True)
    assert codec.decode(codec.encode(values)) == values
