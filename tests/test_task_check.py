"""Tests for task checks, skill checks and Coolness Under Fire."""

import pytest
from pydantic import ValidationError

from t2k.domain.ports import CheckContext
from t2k.domain.rules.task_check import (
    resolve_cuf_check,
    resolve_skill_check,
    resolve_task_check,
)
from t2k.models.check import (
    CufDialogResult,
    CufOptions,
    DialogResult,
    RollMode,
    RollOverrides,
    TaskParameters,
)
from t2k.models.constants import ROF_MAX
from t2k.models.db_models import Actor
from tests.conftest import CountingRandom, FakeActor, FakeDialog, FakeSink


# --- Task check ---


@pytest.mark.asyncio
async def test_task_check_rolls_and_publishes(make_ctx, rng):
    sink = FakeSink()
    ctx = make_ctx(sink=sink)
    roll = await resolve_task_check(ctx, TaskParameters(title="Recon", attribute=8, skill=8))
    assert roll is not None
    assert roll.name == "Recon"
    assert roll.evaluated
    assert roll.formula == "2d8"
    assert rng.calls == 2
    assert len(sink.published) == 1
    published, mode = sink.published[0]
    assert published == roll
    assert mode == RollMode.PUBLIC


@pytest.mark.asyncio
async def test_task_check_without_message(make_ctx):
    sink = FakeSink()
    roll = await resolve_task_check(make_ctx(sink=sink), TaskParameters(send_message=False))
    assert roll is not None
    assert roll.evaluated
    assert sink.published == []


@pytest.mark.asyncio
async def test_ratings_are_clamped(make_ctx):
    roll = await resolve_task_check(make_ctx(), TaskParameters(attribute=40, skill=-3))
    assert roll.formula == "1d12"


@pytest.mark.asyncio
async def test_empty_pool_is_a_legal_check(make_ctx):
    roll = await resolve_task_check(make_ctx(), TaskParameters(attribute=4, skill=2))
    assert roll is not None
    assert roll.dice == ()
    assert roll.successes == 0


@pytest.mark.asyncio
async def test_modifier_clamped_to_100():
    results = []
    for modifier in (500, 100):
        ctx = CheckContext(dialog=FakeDialog(), sink=FakeSink(), rng=CountingRandom(3))
        roll = await resolve_task_check(ctx, TaskParameters(attribute=6, modifier=modifier))
        results.append(roll.model_dump())
    assert results[0] == results[1]


@pytest.mark.asyncio
async def test_negative_max_push_clamped_to_zero(make_ctx):
    low = await resolve_task_check(make_ctx(), TaskParameters(max_push=-5))
    zero = await resolve_task_check(make_ctx(), TaskParameters(max_push=0))
    assert low.max_push == zero.max_push == 0
    assert low.pushable is False


@pytest.mark.asyncio
async def test_cancelled_dialog_returns_none_without_rolling(make_ctx, rng):
    sink = FakeSink()
    dialog = FakeDialog(answer=DialogResult(cancelled=True))
    ctx = make_ctx(dialog=dialog, sink=sink)
    roll = await resolve_task_check(ctx, TaskParameters(attribute=10, ask_for_options=True))
    assert roll is None
    assert dialog.asked == ["roll"]
    assert rng.calls == 0
    assert sink.published == []


@pytest.mark.asyncio
async def test_dialog_shown_by_default_preference(make_ctx):
    dialog = FakeDialog()
    await resolve_task_check(
        make_ctx(dialog=dialog, show_task_check_options=True), TaskParameters()
    )
    assert dialog.asked == ["roll"]


@pytest.mark.asyncio
async def test_ask_for_options_hides_dialog_when_default_on(make_ctx):
    dialog = FakeDialog()
    await resolve_task_check(
        make_ctx(dialog=dialog, show_task_check_options=True),
        TaskParameters(ask_for_options=True),
    )
    assert dialog.asked == []


@pytest.mark.asyncio
async def test_skip_dialog_wins(make_ctx):
    dialog = FakeDialog()
    await resolve_task_check(
        make_ctx(dialog=dialog), TaskParameters(ask_for_options=True, skip_dialog=True)
    )
    assert dialog.asked == []


@pytest.mark.asyncio
async def test_dialog_sees_provisional_formula(make_ctx):
    dialog = FakeDialog()
    await resolve_task_check(
        make_ctx(dialog=dialog),
        TaskParameters(attribute=10, skill=6, rof=2, ask_for_options=True),
    )
    # Ammo dice are not part of the provisional roll.
    assert dialog.seen_formula == "1d10 + 1d6"


@pytest.mark.asyncio
async def test_dialog_overrides_rebuild_the_roll(make_ctx):
    sink = FakeSink()
    answer = DialogResult(
        options=RollOverrides(rof=3, locate=True, max_push=2, roll_mode=RollMode.GM)
    )
    ctx = make_ctx(dialog=FakeDialog(answer=answer), sink=sink)
    roll = await resolve_task_check(
        ctx, TaskParameters(attribute=10, skill=10, ask_for_options=True)
    )
    assert roll.formula == "2d10 + 3dm + 1dl"
    assert roll.max_push == 2
    assert roll.hit_location is not None
    assert sink.published[0][1] == RollMode.GM


@pytest.mark.asyncio
async def test_max_push_lowered_by_dialog(make_ctx):
    answer = DialogResult(options=RollOverrides(max_push=1))
    ctx = make_ctx(dialog=FakeDialog(answer=answer))
    roll = await resolve_task_check(
        ctx, TaskParameters(attribute=8, max_push=3, ask_for_options=True)
    )
    assert roll.max_push == 1


@pytest.mark.asyncio
async def test_modifier_applied_after_pool_is_complete(make_ctx):
    roll = await resolve_task_check(
        make_ctx(), TaskParameters(attribute=8, skill=8, rof=2, modifier=1)
    )
    assert roll.formula == "1d10 + 1d8 + 2dm"


@pytest.mark.asyncio
async def test_negative_modifier(make_ctx):
    roll = await resolve_task_check(make_ctx(), TaskParameters(attribute=8, skill=6, modifier=-2))
    assert roll.formula == "1d6"


def test_non_integer_rating_rejected():
    with pytest.raises(ValidationError):
        TaskParameters(attribute="8")
    with pytest.raises(ValidationError):
        TaskParameters(skill=7.5)


def test_rate_of_fire_is_bounded():
    assert TaskParameters(rof=ROF_MAX).rof == ROF_MAX
    with pytest.raises(ValidationError):
        TaskParameters(rof=ROF_MAX + 1)
    with pytest.raises(ValidationError):
        RollOverrides(rof=ROF_MAX + 1)


def test_dialog_overrides_must_be_integers():
    with pytest.raises(ValidationError):
        RollOverrides(modifier="2")
    with pytest.raises(ValidationError):
        RollOverrides(locate="yes")


# --- Skill check ---


@pytest.mark.asyncio
async def test_skill_check_uses_governing_attribute(make_ctx):
    actor = FakeActor(agl=10, rangedCombat=10)
    roll = await resolve_skill_check(make_ctx(), actor, "rangedCombat", rof=2)
    assert roll.name == "Ranged Combat"
    assert roll.formula == "2d10 + 2dm"


@pytest.mark.asyncio
async def test_skill_check_with_orm_actor(make_ctx):
    actor = Actor(
        name="Kowalski",
        attributes_json='{"str":6,"agl":8,"int":12,"emp":6}',
        skills_json='{"recon":6}',
        cuf=6,
        unit_morale=6,
    )
    roll = await resolve_skill_check(make_ctx(), actor, "recon", title="Spot the ambush")
    assert roll.name == "Spot the ambush"
    assert roll.formula == "1d12 + 1d6"


@pytest.mark.asyncio
async def test_skill_check_unknown_skill(make_ctx):
    with pytest.raises(ValueError, match="Unknown skill"):
        await resolve_skill_check(make_ctx(), FakeActor(), "juggling")


@pytest.mark.asyncio
async def test_skill_check_rejects_non_integer_options(make_ctx, rng):
    with pytest.raises(ValidationError):
        await resolve_skill_check(make_ctx(), FakeActor(agl=10), "rangedCombat", rof="2")
    assert rng.calls == 0


# --- Coolness Under Fire ---


@pytest.mark.asyncio
async def test_cuf_without_actor_does_nothing(make_ctx, rng):
    dialog = FakeDialog()
    sink = FakeSink()
    result = await resolve_cuf_check(make_ctx(dialog=dialog, sink=sink), None)
    assert result is None
    assert dialog.asked == []
    assert rng.calls == 0
    assert sink.published == []


@pytest.mark.asyncio
async def test_cuf_with_unit_morale(make_ctx):
    dialog = FakeDialog(cuf_answer=CufDialogResult(options=CufOptions(unit_morale=True)))
    roll = await resolve_cuf_check(make_ctx(dialog=dialog), FakeActor(cuf=10, unit_morale=8))
    assert dialog.asked == ["cuf"]
    assert roll.name == "Coolness Under Fire"
    assert roll.formula == "1d10 + 1d8"


@pytest.mark.asyncio
async def test_cuf_without_unit_morale(make_ctx):
    roll = await resolve_cuf_check(make_ctx(), FakeActor(cuf=10, unit_morale=8))
    assert roll.formula == "1d10"


@pytest.mark.asyncio
async def test_cuf_skips_generic_dialog(make_ctx):
    dialog = FakeDialog()
    await resolve_cuf_check(
        make_ctx(dialog=dialog, show_task_check_options=True), FakeActor(cuf=8, unit_morale=6)
    )
    assert dialog.asked == ["cuf"]


@pytest.mark.asyncio
async def test_cuf_cancelled(make_ctx, rng):
    dialog = FakeDialog(cuf_answer=CufDialogResult(cancelled=True))
    result = await resolve_cuf_check(make_ctx(dialog=dialog), FakeActor(cuf=8, unit_morale=6))
    assert result is None
    assert rng.calls == 0


@pytest.mark.asyncio
async def test_cuf_roll_mode_from_dialog(make_ctx):
    sink = FakeSink()
    dialog = FakeDialog(cuf_answer=CufDialogResult(options=CufOptions(roll_mode=RollMode.BLIND)))
    await resolve_cuf_check(make_ctx(dialog=dialog, sink=sink), FakeActor(cuf=8, unit_morale=6))
    assert sink.published[0][1] == RollMode.BLIND
