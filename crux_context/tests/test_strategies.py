"""Pruning strategies: preservation, pair coherence, cost tier and summarization."""

from __future__ import annotations

import pytest

from crux_context.config.defaults import SUMMARY_PREFIX
from crux_context.optimization import (
    CallableSummarizer,
    CostTierStrategy,
    OldestFirstStrategy,
    SelectiveStrategy,
    SummarizeStrategy,
    plan_preservation,
    tool_partners,
)
from crux_context.optimization.strategies.selective import build_drop_units, is_question
from crux_context.optimization.strategies.summarize import select_run

from crux_context.tests.utils import alternating, at, make_session, msg, tool_call, tool_output


def _ids(messages):
    return [m.id for m in messages]


def _tokens(messages):
    return sum(m.tokens for m in messages)


# ---------------------------------------------------------------- preservation


def test_preservation_plan_protects_system_and_recent_window() -> None:
    system = msg("system", "rules", t=0)
    turns = alternating(4, start=1)
    plan = plan_preservation([*turns, system], make_session().context_settings)
    assert plan.preserved_ids == {system.id, turns[2].id, turns[3].id}  # nosec B101
    assert _ids(plan.candidates) == _ids(turns[:2])  # nosec B101


def test_zero_recent_window_preserves_only_system() -> None:
    session = make_session(alternating(3), preserve_recent_messages=0, preserve_system_messages=False)
    plan = plan_preservation(session.messages, session.context_settings)
    assert plan.preserved_ids == set() and plan.recent == []  # nosec B101


def test_tool_partners_maps_both_directions() -> None:
    call, result, orphan = tool_call("a", t=1), tool_output("a", t=2), tool_output("zzz", t=3)
    partners = tool_partners([result, call, orphan])
    assert partners == {call.id: result.id, result.id: call.id}  # nosec B101


# ---------------------------------------------------------------- oldest-first


def test_oldest_first_drops_until_target() -> None:
    system = msg("system", "rules", tokens=5, t=0)
    session = make_session([system, *alternating(10, start=1)])
    survivors = OldestFirstStrategy().apply(session, 50)
    assert _tokens(survivors) == 45  # nosec B101
    assert _ids(survivors) == [system.id] + _ids(session.messages[7:])  # nosec B101
    assert len(session.messages) == 11  # nosec B101


def test_oldest_first_never_touches_preserved_messages() -> None:
    session = make_session(alternating(4, tokens=100), preserve_recent_messages=3)
    survivors = OldestFirstStrategy().apply(session, 0)
    assert _ids(survivors) == _ids(session.messages[1:])  # nosec B101


# ---------------------------------------------------------------- selective


def test_selective_keeps_recent_tool_pair_and_reaches_target() -> None:
    plain = alternating(10)
    call, result = tool_call("t1", t=10), tool_output("t1", t=11)
    session = make_session([*plain, call, result])
    survivors = SelectiveStrategy().apply(session, 56)
    assert _tokens(survivors) == 55  # nosec B101
    assert _ids(survivors) == _ids([plain[8], plain[9], call, result])  # nosec B101


def test_selective_never_splits_a_pair_across_the_preserved_window() -> None:
    plain = alternating(4)
    call, result = tool_call("t1", t=4), tool_output("t1", t=5)
    session = make_session([*plain, call, result], preserve_recent_messages=1)
    survivors = SelectiveStrategy().apply(session, 0)
    assert _ids(survivors) == _ids([call, result])  # nosec B101


def test_selective_drops_mid_history_pair_whole() -> None:
    head = msg("user", "start", t=0)
    call, result = tool_call("mid", t=1), tool_output("mid", t=2)
    tail = alternating(4, start=3)
    session = make_session([head, call, result, *tail])
    for target in range(0, 120, 5):
        survivors = set(_ids(SelectiveStrategy().apply(session, target)))
        assert (call.id in survivors) == (result.id in survivors)  # nosec B101


def test_selective_drops_question_and_answer_together() -> None:
    question = msg("user", "What is X?", t=0)
    answer = msg("assistant", "X is Y", t=1)
    rest = [msg("user", "ok", t=2), msg("assistant", "fine", t=3), msg("user", "last", t=4), msg("assistant", "end", t=5)]
    session = make_session([question, answer, *rest])
    survivors = SelectiveStrategy().apply(session, 40)
    assert _ids(survivors) == _ids(rest)  # nosec B101


def test_drop_units_score_is_max_of_members() -> None:
    question, answer = msg("user", "Why?", t=0), msg("assistant", "Because", t=1)
    units = build_drop_units([question, answer], set(), {question.id: 10.0, answer.id: 30.0})
    assert len(units) == 1 and units[0].score == 30.0 and units[0].eligible  # nosec B101
    assert is_question(question) and not is_question(answer)  # nosec B101


# ---------------------------------------------------------------- cost tier


def test_aggressive_cost_tier_keeps_fifth_of_candidates_plus_recent() -> None:
    session = make_session(alternating(22), cost_optimization_mode=True, cost_optimization_level="aggressive")
    survivors = CostTierStrategy().apply(session, 0)
    assert _ids(survivors) == _ids(session.messages[16:])  # nosec B101
    ledger = session.cost_savings
    assert ledger is not None  # nosec B101
    assert ledger.tokens_saved == 160  # nosec B101
    assert ledger.cost_saved == pytest.approx(0.0016)  # nosec B101
    assert ledger.percent_saved == pytest.approx(160 / 220 * 100)  # nosec B101
    entry = ledger.history[0]
    assert (entry.messages_before, entry.messages_after, entry.level) == (22, 6, "aggressive")  # nosec B101
    assert entry.target_message_count == 6  # nosec B101


def test_cost_tier_reinjects_recent_dropped_questions() -> None:
    messages = alternating(10)
    for i in range(4):
        messages[i] = msg(messages[i].role, f"question {i}?", t=i)
    session = make_session(messages, cost_optimization_mode=True, cost_optimization_level="aggressive")
    survivors = set(_ids(CostTierStrategy().apply(session, 0)))
    # candidates 0..7 keep 6 and 7; of the dropped questions only the last three return
    assert {messages[i].id for i in (1, 2, 3, 6, 7, 8, 9)} == survivors  # nosec B101


def test_cost_tier_ledger_floor_and_accumulation() -> None:
    session = make_session(alternating(2), cost_optimization_mode=True)
    strategy = CostTierStrategy()
    assert _ids(strategy.apply(session, 0)) == _ids(session.messages)  # nosec B101
    strategy.apply(session, 0)
    ledger = session.cost_savings
    assert ledger.tokens_saved == 2  # nosec B101
    assert ledger.cost_saved == pytest.approx(0.002)  # nosec B101
    assert len(ledger.history) == 2  # nosec B101
    assert ledger.to_dict()["history"][0]["timestamp"].endswith("+00:00")  # nosec B101


def test_cost_tier_drops_system_when_not_preserved() -> None:
    system = msg("system", "rules", t=0)
    session = make_session(
        [system, *alternating(4, start=1)],
        cost_optimization_mode=True,
        preserve_system_messages=False,
    )
    survivors = CostTierStrategy().apply(session, 0)
    assert system.id not in _ids(survivors)  # nosec B101


# ---------------------------------------------------------------- summarize


def test_summarize_replaces_oldest_run() -> None:
    messages = alternating(6, tokens=40)
    session = make_session(messages)
    strategy = SummarizeStrategy(CallableSummarizer(lambda transcript: "short"))
    survivors = strategy.apply(session, 200)
    summary = survivors[0]
    assert summary.is_summary and summary.role == "assistant"  # nosec B101
    assert summary.content == f"{SUMMARY_PREFIX}short"  # nosec B101
    assert summary.timestamp == at(0)  # nosec B101
    assert _ids(survivors[1:]) == _ids(messages[3:])  # nosec B101
    assert _tokens(survivors) <= 200  # nosec B101


def test_summarize_rejects_poor_compression() -> None:
    messages = alternating(6, tokens=2)
    session = make_session(messages)
    strategy = SummarizeStrategy(CallableSummarizer(lambda transcript: transcript))
    assert _ids(strategy.apply(session, 1)) == _ids(messages)  # nosec B101


def test_summarizer_receives_rendered_transcript() -> None:
    seen: list[str] = []

    def capture(transcript: str) -> str:
        seen.append(transcript)
        return "s"

    messages = [msg("user", "Find it", tokens=50, t=0), tool_call("t1", tokens=50, t=1), tool_output("t1", "42", tokens=50, t=2)]
    session = make_session([*messages, *alternating(2, start=3)])
    SummarizeStrategy(CallableSummarizer(capture)).apply(session, 50)
    assert seen[0].startswith("USER: Find it")  # nosec B101
    assert "[tool result] 42" in seen[0]  # nosec B101


def test_select_run_keeps_tool_pairs_closed() -> None:
    messages = [msg("user", "a", t=0), tool_call("t1", t=1), tool_output("t1", t=2), msg("assistant", "b", t=3)]
    run = select_run(messages, set(), 2, tool_partners(messages))
    assert _ids(run) == _ids(messages[1:3])  # nosec B101
    assert select_run(messages, {m.id for m in messages}, 3, {}) == []  # nosec B101
