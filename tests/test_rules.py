"""Tests for rule string parsing."""
import pytest

from core.validation import RuleToken, parse_rules, parse_token, split_rules


class TestSplitRules:
    def test_splits_top_level_pipes(self):
        assert split_rules("required|varchar") == ["required", "varchar"]

    def test_pipes_inside_parentheses_are_not_separators(self):
        assert split_rules("enum(A|B|default:C)|required") == ["enum(A|B|default:C)", "required"]

    def test_nested_groups(self):
        assert split_rules("enum(A|(B|C))|required") == ["enum(A|(B|C))", "required"]

    def test_empty_segments_are_dropped(self):
        assert split_rules("required||varchar|") == ["required", "varchar"]

    def test_whitespace_around_tokens_is_stripped(self):
        assert split_rules(" required | varchar ") == ["required", "varchar"]

    def test_empty_string(self):
        assert split_rules("") == []


class TestParseToken:
    def test_name_only(self):
        assert parse_token("required") == RuleToken(name="required", params="")

    def test_name_and_params(self):
        assert parse_token("after(startDate)") == RuleToken(name="after", params="startDate")

    def test_params_are_kept_raw(self):
        token = parse_token("enum(HOURS|DAYS|WEEKS|default:DAYS)")
        assert token.name == "enum"
        assert token.params == "HOURS|DAYS|WEEKS|default:DAYS"

    def test_nested_params(self):
        assert parse_token("enum(A|(B|C))").params == "A|(B|C)"

    def test_unclosed_group_takes_rest(self):
        assert parse_token("enum(A|B") == RuleToken(name="enum", params="A|B")

    def test_trailing_text_is_dropped(self):
        assert parse_token("enum(A)xyz") == RuleToken(name="enum", params="A")

    def test_empty_group(self):
        assert parse_token("enum()") == RuleToken(name="enum", params="")

    def test_literal_datetime_param(self):
        assert parse_token("after(2024-01-01 00:00)").params == "2024-01-01 00:00"

    @pytest.mark.parametrize("token, text", [
        (RuleToken("required"), "required"),
        (RuleToken("enum", "A|B"), "enum(A|B)"),
    ])
    def test_str(self, token, text):
        assert str(token) == text


class TestParseRules:
    def test_enum_then_required(self):
        assert parse_rules("enum(A|B|default:C)|required") == (
            RuleToken(name="enum", params="A|B|default:C"),
            RuleToken(name="required"),
        )

    def test_declaration_order_is_kept(self):
        assert [t.name for t in parse_rules("varchar|required|hexcolor")] == ["varchar", "required", "hexcolor"]

    def test_empty_rule_string_yields_no_tokens(self):
        assert parse_rules("") == ()

    def test_unclosed_group_swallows_following_rules(self):
        assert parse_rules("enum(A|B|required") == (RuleToken(name="enum", params="A|B|required"),)

    def test_stray_closing_paren_is_an_ordinary_character(self):
        assert parse_rules(")|required") == (RuleToken(name=")"), RuleToken(name="required"))

    def test_results_are_cached(self):
        assert parse_rules("required|varchar") is parse_rules("required|varchar")


class TestMalformedLogging:
    @staticmethod
    def _reasons(caplog):
        return [r.msg.get("reason") for r in caplog.records if isinstance(r.msg, dict)]

    def test_stray_closing_paren_is_logged(self, caplog):
        assert split_rules("required)|varchar") == ["required)", "varchar"]
        assert self._reasons(caplog) == ["stray_close"]

    def test_unclosed_group_is_logged(self, caplog):
        split_rules("enum(A|B")
        assert self._reasons(caplog) == ["unclosed_group"]

    def test_trailing_text_is_logged(self, caplog):
        parse_token("enum(A)xyz")
        assert self._reasons(caplog) == ["trailing_text"]

    def test_well_formed_string_logs_nothing(self, caplog):
        split_rules("required|enum(A|B|default:A)")
        assert self._reasons(caplog) == []
