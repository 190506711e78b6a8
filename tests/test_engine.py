"""
Tests for the conversation engine — phase transitions end to end.

Run with: pytest tests/test_engine.py -v
"""
import asyncio

import pytest

from catalog.models import Catalog, DocumentTypeEntry, Option, Question
from catalog.document_types import ASSET_PURCHASE, NDA
from graph.engine import ConversationEngine
from graph.messages import GENERATE_OPTIONS
from graph.state import (
    ConversationState,
    CustomAnswer,
    MalformedStateError,
    OptionAnswer,
    Phase,
    initial_state,
)
from conftest import RecordingGenerator


NDA_NAME = "Non-Disclosure Agreement"


def _nda_state(index, **answers):
    return ConversationState(
        phase=Phase.GATHERING,
        document_type=NDA_NAME,
        gathered_answers={k: OptionAnswer(value=v) for k, v in answers.items()},
        current_question_index=index,
    )


def _confirming_nda():
    return ConversationState(
        phase=Phase.CONFIRMING,
        document_type=NDA_NAME,
        gathered_answers={
            "nda_type": OptionAnswer(value="mutual"),
            "duration": OptionAnswer(value="3"),
            "scope": OptionAnswer(value="comprehensive"),
            "carveouts": OptionAnswer(value="standard"),
            "non_solicitation": OptionAnswer(value="none"),
        },
        current_question_index=5,
    )


# ============================================================================
# Selecting a type
# ============================================================================

class TestSelectType:
    def test_opening_turn_lists_catalog(self, turn, catalog):
        response = turn(None, "")
        assert response.state == initial_state()
        assert response.options == catalog.type_options()
        assert "What type of document" in response.message
        assert not response.is_complete

    def test_start_keyword_shows_welcome(self, turn):
        response = turn(initial_state(), "start", {"title": "Acme Sale"})
        assert "**Acme Sale**" in response.message
        assert response.state.phase == Phase.SELECTING_TYPE

    def test_nda_request_emits_first_question(self, turn):
        response = turn(initial_state(), "I need an NDA")
        first = NDA.questions[0]

        assert response.state.phase == Phase.GATHERING
        assert response.state.document_type == NDA_NAME
        assert response.state.current_question_index == 0
        assert response.state.gathered_answers == {}
        assert first.prompt in response.message
        assert first.help_text in response.message
        assert response.options == list(first.options)
        assert response.partial_document

    def test_unresolved_type_reprompts_with_catalog(self, turn, catalog):
        state = initial_state()
        response = turn(state, "a recipe for lasagna")
        assert response.state == state
        assert response.options == catalog.type_options()
        assert response.error is None


# ============================================================================
# Gathering answers
# ============================================================================

class TestGathering:
    def test_numeric_reply_selects_option(self, turn):
        scope = NDA.question("scope")
        assert len(scope.options) == 4

        response = turn(_nda_state(2, nda_type="mutual", duration="3"), "2")
        assert response.state.gathered_answers["scope"] == OptionAnswer(value=scope.options[1].value)
        assert response.state.current_question_index == 3

    def test_answer_advances_with_progress(self, turn):
        response = turn(_nda_state(0), "Mutual")
        assert response.state.gathered_answers == {"nda_type": OptionAnswer(value="mutual")}
        assert response.state.current_question_index == 1
        assert "Got it! *Mutual*" in response.message
        assert "*(2/5)*" in response.message
        assert NDA.question("duration").prompt in response.message
        assert response.options == list(NDA.question("duration").options)

    def test_unmatched_reply_repeats_question(self, turn):
        state = _nda_state(2, nda_type="mutual", duration="3")
        response = turn(state, "whatever you think")

        assert response.state.current_question_index == 2
        assert response.state.gathered_answers == state.gathered_answers
        assert response.state.phase == Phase.GATHERING
        assert f"**{NDA.question('scope').prompt}**" in response.message
        assert response.options == list(NDA.question("scope").options)

        again = turn(state, "still not sure")
        assert again.message == response.message
        assert again.options == response.options

    def test_custom_answer_stored_verbatim(self, turn):
        response = turn(_nda_state(1, nda_type="mutual"), "18 months after closing")
        assert response.state.gathered_answers["duration"] == CustomAnswer(text="18 months after closing")
        assert "Got it! *18 months after closing*" in response.message

    def test_incoming_state_not_mutated(self, turn):
        state = _nda_state(0)
        response = turn(state, "Mutual")
        assert state.gathered_answers == {}
        assert state.current_question_index == 0
        assert response.state is not state

    def test_skip_predicate_bypasses_question(self, turn):
        state = turn(initial_state(), "asset purchase agreement").state
        for reply in ("Intangible Only", "Cash at Closing", "Basic"):
            state = turn(state, reply).state

        assert state.current_question_index == ASSET_PURCHASE.question_ids.index("non_compete")
        assert "employees" not in state.gathered_answers

        response = turn(state, "No")
        assert response.state.phase == Phase.CONFIRMING
        assert "Employees" not in response.message

    def test_skip_predicate_inactive(self, turn):
        state = turn(initial_state(), "asset purchase agreement").state
        for reply in ("Tangible Only", "Cash at Closing", "Basic"):
            state = turn(state, reply).state
        assert state.current_question_index == ASSET_PURCHASE.question_ids.index("employees")

    def test_last_answer_moves_to_confirming(self, turn):
        state = _nda_state(4, nda_type="mutual", duration="3", scope="comprehensive", carveouts="standard")
        response = turn(state, "No")

        assert response.state.phase == Phase.CONFIRMING
        assert response.state.current_question_index == len(NDA.questions)
        assert "**Document Summary:**" in response.message
        assert "• **Nda Type**: Mutual" in response.message
        assert "• **Non Solicitation**: No" in response.message
        assert "Ready to generate your Non-Disclosure Agreement (NDA)?" in response.message
        assert response.options == GENERATE_OPTIONS

    def test_bypassed_required_question_is_asked(self):
        entry = DocumentTypeEntry(
            name="Board Resolution",
            display_name="Board Resolution",
            description="Resolution of directors",
            required_fields=["matter", "quorum"],
            questions=[
                Question(id="matter", prompt="What is being resolved?", allow_custom_answer=True),
                Question(
                    id="quorum",
                    prompt="Quorum?",
                    options=[Option(label="Two directors", value="two")],
                    skip_if=lambda answers: "matter" in answers,
                ),
            ],
        )
        engine = ConversationEngine(Catalog(document_types=(entry,)), RecordingGenerator())
        state = ConversationState(phase=Phase.GATHERING, document_type="Board Resolution")

        response = asyncio.run(engine.take_turn(state, "Appoint a new CFO"))
        assert response.state.phase == Phase.GATHERING
        assert response.state.current_question_index == 1
        assert "Quorum?" in response.message

        response = asyncio.run(engine.take_turn(response.state, "1"))
        assert response.state.phase == Phase.CONFIRMING


# ============================================================================
# Confirming and generating
# ============================================================================

class TestConfirming:
    def test_generate_invokes_generator(self, turn, generator):
        response = turn(_confirming_nda(), "yes please generate", {"title": "Acme Sale"})

        assert response.state.phase == Phase.COMPLETE
        assert response.is_complete
        assert response.generated_document == "DRAFT DOCUMENT"
        assert response.disclaimer == "Not legal advice."
        assert response.error is None

        assert len(generator.calls) == 1
        call = generator.calls[0]
        assert call["document_type"] == NDA_NAME
        assert call["deal_context"] == {"title": "Acme Sale"}
        for question in NDA.questions:
            assert question.prompt in call["requirements"]
        assert "Answer: Mutual (Both parties share confidential info)" in call["requirements"]
        assert "Answer: Yes, Standard (Public info, prior knowledge, legal requirements)" in call["requirements"]

    def test_modify_resets_to_first_question(self, turn, generator):
        response = turn(_confirming_nda(), "I want to change something")
        first = NDA.questions[0]

        assert response.state.phase == Phase.GATHERING
        assert response.state.gathered_answers == {}
        assert response.state.current_question_index == 0
        assert first.prompt in response.message
        assert response.options == list(first.options)
        assert generator.calls == []

    @pytest.mark.parametrize("reply", ["generate", "Generate Document", "create it", "YES"])
    def test_generate_wording(self, turn, reply):
        assert turn(_confirming_nda(), reply).state.phase == Phase.COMPLETE

    @pytest.mark.parametrize("reply", ["modify", "Modify Answers", "go back"])
    def test_modify_wording(self, turn, reply):
        assert turn(_confirming_nda(), reply).state.phase == Phase.GATHERING

    def test_other_reply_reasks(self, turn, generator):
        state = _confirming_nda()
        response = turn(state, "hmm, not sure")
        assert response.state == state
        assert [o.value for o in response.options] == ["generate", "modify"]
        assert generator.calls == []

    def test_generation_failure_stays_confirming(self, catalog):
        failing = RecordingGenerator(error=RuntimeError("model offline"))
        engine = ConversationEngine(catalog, failing)
        state = _confirming_nda()

        response = asyncio.run(engine.take_turn(state, "generate"))
        assert response.error == "model offline"
        assert response.state.phase == Phase.CONFIRMING
        assert response.state.gathered_answers == state.gathered_answers
        assert not response.is_complete
        assert response.message

        retry = asyncio.run(ConversationEngine(catalog, RecordingGenerator()).take_turn(response.state, "generate"))
        assert retry.state.phase == Phase.COMPLETE

    def test_interrupted_generation_can_resume(self, turn):
        state = _confirming_nda().evolve(phase=Phase.GENERATING)
        assert turn(state, "generate").state.phase == Phase.COMPLETE

    def test_complete_is_terminal(self, turn, generator):
        state = _confirming_nda().evolve(phase=Phase.COMPLETE)
        response = turn(state, "generate again")
        assert response.state == state
        assert response.is_complete
        assert generator.calls == []


# ============================================================================
# Full conversation
# ============================================================================

class TestFullConversation:
    def test_nda_end_to_end(self, turn, generator):
        response = turn(None, "I need an NDA")
        for reply in ("Mutual", "3 years", "Comprehensive", "Yes, Standard", "No"):
            response = turn(response.state, reply)
        assert response.state.phase == Phase.CONFIRMING

        response = turn(response.state, "yes please generate")
        assert response.is_complete
        assert generator.calls[0]["requirements"].startswith("DOCUMENT TYPE: Non-Disclosure Agreement (NDA)")

    def test_state_survives_json_round_trip(self, turn):
        response = turn(None, "employment contract")
        payload = response.state.model_dump(mode="json")
        assert payload["phase"] == "gathering"

        response = turn(payload, "Head of Sales")
        assert response.state.gathered_answers["role_type"] == CustomAnswer(text="Head of Sales")

        payload = response.state.model_dump(mode="json")
        assert payload["gathered_answers"]["role_type"] == {"kind": "custom", "text": "Head of Sales"}
        assert turn(payload, "Ongoing").state.gathered_answers["term"] == OptionAnswer(value="ongoing")


# ============================================================================
# Errors
# ============================================================================

class TestErrors:
    def test_unknown_document_type_reports_error(self, turn):
        state = ConversationState(phase=Phase.GATHERING, document_type="Lease Agreement")
        response = turn(state, "anything")
        assert response.error == "Invalid document type"
        assert response.message == "Invalid document type selected."
        assert response.state == state

    def test_unknown_type_never_reaches_generator(self, turn, generator):
        state = _confirming_nda().evolve(document_type="Lease Agreement", gathered_answers={})
        response = turn(state, "generate")
        assert response.error == "Invalid document type"
        assert response.state == state
        assert generator.calls == []

    def test_cursor_out_of_range(self, turn):
        with pytest.raises(MalformedStateError):
            turn(_nda_state(9), "Mutual")

    def test_negative_cursor(self, turn):
        with pytest.raises(MalformedStateError):
            turn(_nda_state(-1), "Mutual")

    def test_answer_for_unknown_question(self, turn):
        with pytest.raises(MalformedStateError):
            turn(_nda_state(1, favourite_colour="blue"), "3 years")

    def test_gathering_without_type(self, turn):
        with pytest.raises(MalformedStateError):
            turn(ConversationState(phase=Phase.GATHERING), "Mutual")

    def test_unreadable_state_payload(self, turn):
        with pytest.raises(MalformedStateError):
            turn({"phase": "daydreaming"}, "hello")
