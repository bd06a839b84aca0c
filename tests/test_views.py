import discord
import pytest
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

from conftest import make_interaction
from utils.models import Subject
from utils.sightings import SightingPages
from utils.views import FIRST, LAST, NEXT, PREVIOUS, SightingsView, target_page


class TestTargetPage:
    @pytest.mark.parametrize("page", [0, 1, 2])
    def test_first_and_last_are_idempotent(self, page):
        once = target_page(FIRST, page, 3)
        assert target_page(FIRST, once, 3) == once == 0
        once = target_page(LAST, page, 3)
        assert target_page(LAST, once, 3) == once == 2

    def test_previous_clamps_at_zero(self):
        assert target_page(PREVIOUS, 0, 3) == 0
        assert target_page(PREVIOUS, 2, 3) == 1

    def test_next_clamps_at_last(self):
        assert target_page(NEXT, 2, 3) == 2
        assert target_page(NEXT, 0, 3) == 1

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            target_page("sideways", 0, 3)


def make_view(db, total=12, owner_id=1, per_page=5):
    pages = SightingPages(db, Subject(user_id=owner_id), per_page=per_page)
    return SightingsView(pages, owner_id=owner_id, total_count=total, timeout=300)


def button_states(view):
    return [view.first_page.disabled, view.prev_page.disabled, view.next_page.disabled, view.last_page.disabled]


class TestSightingsView:
    @pytest.mark.asyncio
    async def test_initial_send(self, twelve_sightings):
        view = make_view(twelve_sightings)
        interaction = make_interaction(done=True)
        interaction.followup.send.return_value = MagicMock(id=99)

        await view.send_message(interaction)

        assert view.total_pages == 3
        assert view.page == 0
        assert button_states(view) == [True, True, False, False]
        embed = interaction.followup.send.await_args.kwargs["embed"]
        assert len(embed.fields) == 5
        assert embed.description == "Persoonlijke spots - Pagina 1 van 3 (12 totaal)"
        assert view.message is interaction.followup.send.return_value
        interaction.response.defer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_defers_when_needed(self, twelve_sightings):
        view = make_view(twelve_sightings)
        interaction = make_interaction(done=False)

        await view.send_message(interaction)

        interaction.response.defer.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_last_jumps_to_final_page(self, twelve_sightings):
        view = make_view(twelve_sightings)
        view.update_buttons()
        interaction = make_interaction()

        await view.go_to(interaction, LAST)

        assert view.page == 2
        assert button_states(view) == [False, False, True, True]
        embed = interaction.edit_original_response.await_args.kwargs["embed"]
        assert len(embed.fields) == 2
        assert embed.description == "Persoonlijke spots - Pagina 3 van 3 (12 totaal)"
        assert interaction.edit_original_response.await_args.kwargs["view"] is view

    @pytest.mark.asyncio
    async def test_walks_pages(self, twelve_sightings):
        view = make_view(twelve_sightings)
        for action, expected in [(NEXT, 1), (NEXT, 2), (NEXT, 2), (PREVIOUS, 1), (FIRST, 0), (PREVIOUS, 0)]:
            await view.go_to(make_interaction(), action)
            assert view.page == expected
            assert view.first_page.disabled == view.prev_page.disabled == (expected == 0)
            assert view.next_page.disabled == view.last_page.disabled == (expected == 2)

    @pytest.mark.asyncio
    async def test_single_page_disables_everything(self):
        from conftest import FakeDB, make_sighting
        view = make_view(FakeDB([make_sighting()]), total=1)
        view.update_buttons()
        assert button_states(view) == [True, True, True, True]

    @pytest.mark.asyncio
    async def test_wrong_user_is_rejected(self, twelve_sightings):
        view = make_view(twelve_sightings, owner_id=1)
        intruder = make_interaction(user_id=2)

        allowed = await view.interaction_check(intruder)

        assert allowed is False
        intruder.response.send_message.assert_awaited_once_with("Deze knoppen zijn niet voor jou!", ephemeral=True)
        intruder.edit_original_response.assert_not_awaited()
        assert view.page == 0
        assert twelve_sightings.fetch_calls == []

    @pytest.mark.asyncio
    async def test_owner_is_allowed(self, twelve_sightings):
        view = make_view(twelve_sightings, owner_id=1)
        owner = make_interaction(user_id=1)

        assert await view.interaction_check(owner) is True
        owner.response.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_total_pages_is_a_snapshot(self, twelve_sightings):
        from conftest import make_sighting
        view = make_view(twelve_sightings)
        twelve_sightings.rows.extend(make_sighting(100 + i) for i in range(10))

        await view.go_to(make_interaction(), LAST)

        assert view.total_pages == 3
        assert view.page == 2


class TestTimeout:
    @pytest.mark.asyncio
    async def test_disables_buttons_once(self, twelve_sightings):
        view = make_view(twelve_sightings)
        view.update_buttons()
        view.message = MagicMock(id=1)
        view.message.edit = AsyncMock()

        await view.on_timeout()
        await view.on_timeout()

        assert view.expired
        assert all(item.disabled for item in view.children)
        view.message.edit.assert_awaited_once_with(view=view)

    @pytest.mark.asyncio
    async def test_deleted_message_is_ignored(self, twelve_sightings):
        view = make_view(twelve_sightings)
        view.message = MagicMock(id=1)
        view.message.edit = AsyncMock(
            side_effect=discord.NotFound(MagicMock(status=404, reason="Not Found"), "Unknown Message")
        )

        await view.on_timeout()

        assert view.expired

    @pytest.mark.asyncio
    async def test_no_transitions_after_expiry(self, twelve_sightings):
        view = make_view(twelve_sightings)
        await view.on_timeout()
        interaction = make_interaction()

        await view.go_to(interaction, NEXT)

        assert view.page == 0
        interaction.edit_original_response.assert_not_awaited()


class TestFailures:
    @pytest.mark.asyncio
    async def test_failed_fetch_keeps_current_page(self, twelve_sightings):
        view = make_view(twelve_sightings)
        view.update_buttons()
        twelve_sightings.fetch_sightings = AsyncMock(side_effect=RuntimeError("db down"))
        interaction = make_interaction()

        with pytest.raises(RuntimeError):
            await view.go_to(interaction, NEXT)

        assert view.page == 0
        assert button_states(view) == [True, True, False, False]
        interaction.edit_original_response.assert_not_awaited()
        assert view.last_interaction is None

    @pytest.mark.asyncio
    async def test_on_error_reports_generically(self, twelve_sightings):
        view = make_view(twelve_sightings)
        interaction = make_interaction(done=True)

        await view.on_error(interaction, RuntimeError("db down"), view.next_page)

        interaction.client.logger.error.assert_called_once()
        embed = interaction.followup.send.await_args.kwargs["embed"]
        assert embed.title.startswith("❌ Er ging iets mis")
        assert interaction.followup.send.await_args.kwargs["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_on_error_before_response(self, twelve_sightings):
        view = make_view(twelve_sightings)
        interaction = make_interaction(done=False)

        await view.on_error(interaction, RuntimeError("db down"), view.next_page)

        interaction.response.send_message.assert_awaited_once()


class TestInactivityWindow:
    @pytest.mark.asyncio
    async def test_timeout_edits_through_latest_interaction(self, twelve_sightings):
        view = make_view(twelve_sightings)
        view.message = MagicMock(id=1)
        view.message.edit = AsyncMock()
        first, latest = make_interaction(), make_interaction()
        await view.go_to(first, NEXT)
        await view.go_to(latest, NEXT)

        await view.on_timeout()

        assert view.last_interaction is latest
        latest.edit_original_response.assert_awaited_with(view=view)
        assert first.edit_original_response.await_count == 1
        view.message.edit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_window_restarts_after_render(self, twelve_sightings):
        view = make_view(twelve_sightings)
        interaction = make_interaction()
        interaction.edit_original_response = AsyncMock(side_effect=lambda **kw: order.append("render"))
        order = []
        with patch.object(SightingsView, "timeout", new_callable=PropertyMock) as timeout:
            timeout.return_value = 300
            timeout.side_effect = lambda *args: order.append("rearm") if args else 300
            await view.go_to(interaction, NEXT)

        assert order == ["render", "rearm"]
