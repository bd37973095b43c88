from __future__ import annotations

import threading

import pytest

from clicker.models import UserRecord
from clicker.services import UPGRADE_TIERS, ClickerGame
from clicker.services.errors import (
    InsufficientBalance,
    UnknownUser,
    UpgradeAlreadyOwned,
    UserNotFound,
    UsernameInvalidCharacters,
    UsernameProfane,
    UsernameRequired,
    UsernameTaken,
)


def _seed(store, count, clicks, named=False):
    for index in range(count):
        store.put(
            UserRecord(
                user_id=f"seed{index}",
                username=f"seed{index}" if named else None,
                clicks=clicks,
            )
        )


def _set_clicks(store, user_id, clicks):
    record = store.get(user_id)
    record.clicks = clicks
    store.put(record)


def test_first_click_creates_user(game):
    result = game.register_click(None)

    assert result["userId"]
    assert result["clicks"] == 1
    assert result["clickMultiplier"] == 1
    assert result["username"] is None
    assert result["inTop100"] is True
    assert result["needsUsername"] is True
    assert result["leaderboard"] == []
    assert game.store.count() == 1


def test_unknown_id_creates_new_user(game):
    result = game.register_click("not-a-real-id")

    assert result["userId"] != "not-a-real-id"
    assert game.store.get("not-a-real-id") is None


def test_clicks_accumulate_for_known_user(game):
    user_id = game.register_click()["userId"]
    for _ in range(4):
        result = game.register_click(user_id)

    assert result["clicks"] == 5
    assert game.store.count() == 1


def test_needs_username_repeats_until_named(game):
    user_id = game.register_click()["userId"]

    assert game.register_click(user_id)["needsUsername"] is True
    game.assign_username(user_id, "Ann")
    result = game.register_click(user_id)

    assert result["needsUsername"] is False
    assert result["username"] == "Ann"
    assert result["leaderboard"][0]["clicks"] == 3


def test_top_transition_independent_of_username(game):
    _seed(game.store, 100, clicks=5)

    user_id = game.register_click()["userId"]
    states = []
    for _ in range(5):
        result = game.register_click(user_id)
        states.append((result["clicks"], result["inTop100"], result["needsUsername"]))

    # ties with the seeded players go to the earlier-created ones
    assert states == [
        (2, False, False),
        (3, False, False),
        (4, False, False),
        (5, False, False),
        (6, True, True),
    ]


def test_assign_username_trims_and_ranks(game):
    user_id = game.register_click()["userId"]

    result = game.assign_username(user_id, "  Alice  ")

    assert result["success"] is True
    assert result["username"] == "Alice"
    assert result["leaderboard"] == [
        {"userId": user_id, "username": "Alice", "clicks": 1, "rank": 1}
    ]
    assert game.store.get(user_id).username == "Alice"


@pytest.mark.parametrize("user_id", [None, "", "missing", 7])
def test_assign_username_unknown_user(game, user_id):
    with pytest.raises(UnknownUser):
        game.assign_username(user_id, "Alice")


def test_assign_username_validation_errors_propagate(game):
    user_id = game.register_click()["userId"]

    with pytest.raises(UsernameInvalidCharacters):
        game.assign_username(user_id, "a!b")
    with pytest.raises(UsernameRequired):
        game.assign_username(user_id, None)
    with pytest.raises(UsernameProfane):
        game.assign_username(user_id, "darn")
    assert game.store.get(user_id).username is None


def test_usernames_unique_ignoring_case(game):
    ann = game.register_click()["userId"]
    bob = game.register_click()["userId"]
    game.assign_username(ann, "Ann")

    with pytest.raises(UsernameTaken):
        game.assign_username(bob, "ann")
    assert game.store.get(bob).username is None


def test_user_may_resubmit_own_name(game):
    ann = game.register_click()["userId"]
    game.assign_username(ann, "Ann")

    assert game.assign_username(ann, "ANN")["username"] == "ANN"


def test_upgrade_requires_balance(game):
    user_id = game.register_click()["userId"]
    _set_clicks(game.store, user_id, 499)

    with pytest.raises(InsufficientBalance) as excinfo:
        game.purchase_upgrade(user_id)
    assert "500" in str(excinfo.value)
    assert game.store.get(user_id).clicks == 499


def test_upgrade_at_exact_price(game):
    user_id = game.register_click()["userId"]
    _set_clicks(game.store, user_id, 500)

    result = game.purchase_upgrade(user_id)

    assert result["clicks"] == 0
    assert result["clickMultiplier"] == 2
    assert result["userId"] == user_id
    assert "leaderboard" in result
    with pytest.raises(UpgradeAlreadyOwned):
        game.purchase_upgrade(user_id)


def test_upgrade_unknown_user(game):
    with pytest.raises(UnknownUser):
        game.purchase_upgrade("missing")


def test_multiplier_applies_to_later_clicks_only(game):
    user_id = game.register_click()["userId"]
    _set_clicks(game.store, user_id, 502)
    game.purchase_upgrade(user_id)

    clicks = [game.register_click(user_id)["clicks"] for _ in range(3)]

    assert clicks == [4, 6, 8]


def test_user_state(game):
    user_id = game.register_click()["userId"]

    assert game.user_state(user_id) == {
        "userId": user_id,
        "clicks": 1,
        "username": None,
        "clickMultiplier": 1,
        "inTop100": True,
    }
    with pytest.raises(UserNotFound):
        game.user_state("missing")


def test_upgrade_tier_table():
    assert UPGRADE_TIERS[0].cost == 500
    assert UPGRADE_TIERS[0].multiplier == 2


def test_concurrent_clicks_are_not_lost(json_store):
    game = ClickerGame(json_store, is_profane=lambda text: False)
    user_id = game.register_click()["userId"]

    def worker():
        for _ in range(25):
            game.register_click(user_id)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert json_store.get(user_id).clicks == 101


def test_state_survives_restart(snapshot_path, json_store):
    from clicker.services import JsonSnapshotStore

    game = ClickerGame(json_store, is_profane=lambda text: False)
    ann = game.register_click()["userId"]
    bob = game.register_click()["userId"]
    game.assign_username(ann, "Ann")
    _set_clicks(json_store, bob, 600)
    game.purchase_upgrade(bob)
    game.register_click(bob)

    restarted = JsonSnapshotStore(snapshot_path)
    restarted.load()

    for user_id in (ann, bob):
        before, after = json_store.get(user_id), restarted.get(user_id)
        assert (after.clicks, after.username, after.click_multiplier) == (
            before.clicks,
            before.username,
            before.click_multiplier,
        )
    assert restarted.get(bob).clicks == 102
