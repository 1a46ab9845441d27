"""QuestionSet loading and validation tests.

Validates that the shipped locale files load into the fixed six-question
sequence and that malformed question files are rejected at load time.
"""

import pytest

from soul_builder.question_set import QuestionSet

EXPECTED_KEYS = ["name", "personality", "core_values", "tone", "backstory", "signature"]

_MESSAGES_YAML = """
messages:
  welcome: "w {total}"
  already_active: "a {step}/{total}"
  already_active_complete: "c {total}"
  no_session: "n"
  already_complete: "d"
  answer_required: "r {question}"
  answer_saved: "s {step}/{total}"
  complete: "done {name}"
  not_complete: "{remaining} left"
  generated: "g {name}"
  export_ready: "e"
  no_signature: "none"
  question_label: "Q"
"""


def _write_locale(tmp_path, questions_yaml: str):
    (tmp_path / "xx.yaml").write_text(questions_yaml + _MESSAGES_YAML, encoding="utf-8")
    return QuestionSet(locale="xx", locale_dir=tmp_path)


# =====================================================================
# Shipped locales
# =====================================================================


class TestShippedLocales:

    def test_english_has_six_questions_in_order(self, questions):
        """The English set covers every answer slot in questionnaire order."""
        assert questions.total_steps == 6
        assert [q.field_key for q in questions.questions] == EXPECTED_KEYS
        assert [q.position for q in questions.questions] == [1, 2, 3, 4, 5, 6]

    def test_only_signature_is_optional(self, questions):
        optional = [q.field_key for q in questions.questions if q.optional]
        assert optional == ["signature"], f"Unexpected optional fields: {optional}"

    @pytest.mark.parametrize("locale", ["en", "de"])
    def test_every_shipped_locale_loads(self, locale):
        qs = QuestionSet(locale=locale)
        qs.load()
        assert qs.total_steps == 6
        assert qs.messages is not None
        assert qs.format("welcome", total=6)

    def test_german_prompts(self):
        qs = QuestionSet(locale="de")
        qs.load()
        assert qs.question_at(1).prompt == "Wie soll dein Agent heißen?"
        assert qs.format("no_signature") == "*Keine Signatur definiert*"

    def test_question_at_bounds(self, questions):
        """Steps outside 1..N have no question (N+1 is the complete state)."""
        assert questions.question_at(0) is None
        assert questions.question_at(1).field_key == "name"
        assert questions.question_at(6).field_key == "signature"
        assert questions.question_at(7) is None

    def test_unsupported_locale_rejected(self):
        with pytest.raises(ValueError, match="Unsupported locale"):
            QuestionSet(locale="fr")

    def test_format_before_load_raises(self):
        with pytest.raises(RuntimeError):
            QuestionSet(locale="en").format("welcome", total=6)


# =====================================================================
# Validation of custom files
# =====================================================================


class TestValidation:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            QuestionSet(locale="xx", locale_dir=tmp_path).load()

    def test_empty_question_list(self, tmp_path):
        qs = _write_locale(tmp_path, "questions: []\n")
        with pytest.raises(ValueError, match="empty"):
            qs.load()

    def test_out_of_order_positions(self, tmp_path):
        qs = _write_locale(tmp_path, """
questions:
  - {position: 2, field_key: name, prompt: a}
  - {position: 1, field_key: personality, prompt: b}
  - {position: 3, field_key: core_values, prompt: c}
  - {position: 4, field_key: tone, prompt: d}
  - {position: 5, field_key: backstory, prompt: e}
  - {position: 6, field_key: signature, prompt: f, optional: true}
""")
        with pytest.raises(ValueError, match="positions"):
            qs.load()

    def test_missing_slot(self, tmp_path):
        qs = _write_locale(tmp_path, """
questions:
  - {position: 1, field_key: name, prompt: a}
  - {position: 2, field_key: personality, prompt: b}
""")
        with pytest.raises(ValueError, match="do not match"):
            qs.load()

    def test_unknown_field_key(self, tmp_path):
        """Field keys outside the answer record fail model validation."""
        qs = _write_locale(tmp_path, """
questions:
  - {position: 1, field_key: nickname, prompt: a}
""")
        with pytest.raises(ValueError):
            qs.load()
