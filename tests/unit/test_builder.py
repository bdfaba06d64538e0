"""
Unit tests for builder operations over question configs.
"""

import pytest

from formcraft import builder
from formcraft.engine import validate_config
from formcraft.errors import UnknownQuestionTypeError
from formcraft.models import (
    Blank,
    CategorizeConfig,
    ChoiceConfig,
    ClozeConfig,
    ComprehensionConfig,
    McqSubQuestion,
    ShortAnswerSubQuestion,
    TrueFalseSubQuestion,
    parse_question,
)


class TestNewQuestion:

    @pytest.mark.parametrize("question_type", ["mcq", "mca", "categorize", "cloze", "comprehension", "image"])
    def test_new_question_has_valid_default_config(self, question_type):
        question = builder.new_question(question_type)
        assert question.type == question_type
        assert question.required is True
        assert validate_config(question.type, question.config) is None

    def test_title_follows_order(self):
        assert builder.new_question("mcq", order=2).title == "Question 3"
        assert builder.new_question("mcq", title="Pick one").title == "Pick one"

    def test_ids_are_unique(self):
        ids = {builder.new_question("cloze").id for _ in range(20)}
        assert len(ids) == 20

    def test_points_from_settings(self, monkeypatch):
        monkeypatch.setenv("FORMCRAFT_DEFAULT_POINTS", "4")
        question = builder.new_question("categorize")
        assert question.scoring.points == 4
        assert question.scoring.enabled is False

    def test_unknown_type(self):
        with pytest.raises(UnknownQuestionTypeError):
            builder.new_question("essay")

    def test_duplicate_question(self, sample_cloze_question):
        original = parse_question(sample_cloze_question)
        duplicate = builder.duplicate_question(original, order=5)

        assert duplicate.id != original.id
        assert duplicate.title == "Capitals (Copy)"
        assert duplicate.order == 5
        assert duplicate.config.text == original.config.text
        assert duplicate.config.blanks is not original.config.blanks


class TestOptions:

    @pytest.fixture
    def config(self):
        return ChoiceConfig.model_validate({"options": [{"id": "a", "text": "A"}]})

    def test_add_option(self, config):
        updated = builder.add_option(config)
        assert [o.text for o in updated.options] == ["A", "Option 2"]
        assert len(config.options) == 1

    def test_update_option(self, config):
        updated = builder.update_option(config, "a", text="Alpha", is_correct=True)
        assert updated.options[0].text == "Alpha"
        assert updated.options[0].is_correct is True
        assert config.options[0].text == "A"

    def test_delete_option(self, config):
        assert builder.delete_option(config, "a").options == []


class TestCategories:

    @pytest.fixture
    def config(self, sample_categorize_question):
        return CategorizeConfig.model_validate(sample_categorize_question["config"])

    def test_add_category_cycles_colors(self, config):
        updated = builder.add_category(config)
        assert updated.categories[-1].label == "Category 3"
        assert updated.categories[-1].color == builder.CATEGORY_COLORS[2]

    def test_delete_category_moves_items(self, config):
        updated = builder.delete_category(config, "mammals")
        assert [c.id for c in updated.categories] == ["birds"]
        assert {item.correct_category for item in updated.items} == {"birds"}

    def test_delete_last_category_unsets_items(self, config):
        updated = builder.delete_category(builder.delete_category(config, "mammals"), "birds")
        assert updated.categories == []
        assert all(item.correct_category is None for item in updated.items)

    def test_add_item_defaults_to_first_category(self, config):
        updated = builder.add_item(config, text="Whale")
        assert updated.items[-1].text == "Whale"
        assert updated.items[-1].correct_category == "mammals"

    def test_update_and_delete_item(self, config):
        updated = builder.update_item(config, "dog", correct_category="birds")
        assert updated.items[0].correct_category == "birds"
        assert [i.id for i in builder.delete_item(updated, "dog").items] == ["cat", "eagle", "owl"]


class TestClozeBlanks:

    def test_sync_seeds_new_blanks(self):
        blanks = builder.sync_blanks("The {{capital}} of France is {{Paris}}.", [])
        assert [b.correct_answers for b in blanks] == [["capital"], ["Paris"]]
        assert [b.position for b in blanks] == [0, 1]

    def test_sync_keeps_existing_positions(self):
        existing = [Blank(id="b1", correct_answers=["Paris", "Paree"], case_sensitive=True)]
        blanks = builder.sync_blanks("{{Paris}} and {{Rome}}", existing)

        assert blanks[0].id == "b1"
        assert blanks[0].correct_answers == ["Paris", "Paree"]
        assert blanks[0].case_sensitive is True
        assert blanks[1].correct_answers == ["Rome"]
        assert blanks[1].case_sensitive is False

    def test_sync_drops_removed_positions(self):
        existing = [Blank(id="b1"), Blank(id="b2")]
        assert len(builder.sync_blanks("only {{one}}", existing)) == 1

    def test_set_cloze_text_keeps_config_valid(self):
        config = ClozeConfig.model_validate({"text": "{{a}}", "blanks": [{"correctAnswers": ["a"]}]})
        updated = builder.set_cloze_text(config, "{{a}} then {{b}} then {{c}}")
        assert len(updated.blanks) == 3
        assert validate_config("cloze", updated) is None

    def test_update_blank(self):
        config = ClozeConfig.model_validate({"text": "{{a}}", "blanks": [{"id": "b1", "correctAnswers": ["a"]}]})
        updated = builder.update_blank(config, "b1", correct_answers=["a", "A"], case_sensitive=True)
        assert updated.blanks[0].correct_answers == ["a", "A"]
        assert updated.blanks[0].case_sensitive is True


class TestSubQuestions:

    @pytest.fixture
    def config(self):
        return ComprehensionConfig.model_validate({"passage": "Text", "subQuestions": []})

    def test_new_sub_question_defaults(self):
        mcq = builder.new_sub_question("mcq")
        assert isinstance(mcq, McqSubQuestion)
        assert len(mcq.options) == 4

        true_false = builder.new_sub_question("true-false")
        assert isinstance(true_false, TrueFalseSubQuestion)
        assert true_false.correct_answer is True

        short = builder.new_sub_question("short-answer")
        assert isinstance(short, ShortAnswerSubQuestion)
        assert short.correct_answers == ["Sample answer"]
        assert short.max_length == 200

    def test_unknown_sub_type(self):
        with pytest.raises(UnknownQuestionTypeError):
            builder.new_sub_question("essay")

    def test_add_update_delete(self, config):
        config = builder.add_sub_question(config, "mca")
        config = builder.add_sub_question(config, "short-answer")
        first, second = config.sub_questions

        config = builder.update_sub_question(config, second.id, question="Why?")
        assert config.sub_questions[1].question == "Why?"

        config = builder.delete_sub_question(config, first.id)
        assert [s.id for s in config.sub_questions] == [second.id]

    def test_sub_options_keep_a_minimum(self, config):
        config = builder.add_sub_question(config, "mcq")
        sub = config.sub_questions[0]

        config = builder.add_sub_option(config, sub.id)
        assert len(config.sub_questions[0].options) == 5

        for option in list(config.sub_questions[0].options):
            config = builder.delete_sub_option(config, sub.id, option.id)
        assert len(config.sub_questions[0].options) == builder.MIN_SUB_OPTIONS

    def test_sub_option_ops_ignore_non_choice(self, config):
        config = builder.add_sub_question(config, "true-false")
        sub_id = config.sub_questions[0].id
        assert builder.add_sub_option(config, sub_id) == config
