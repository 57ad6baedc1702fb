import pytest
from decimal import Decimal

from tourney.core.exceptions import DuplicateUserError, NotFoundError
from tourney.models.participant import Participant
from tourney.schemas.user_schemas import UserProfileUpdate
from tourney.services import tournament_service, user_service


class TestUserService:

    def test_create_user_defaults(self, db):
        user = user_service.create_user(db, email="new@example.com", username="newbie", hashed_password="h")

        assert user.id is not None
        assert user.wallet_balance == Decimal("0")
        assert user.role == "User"
        assert user.is_banned is False
        assert user.created_at is not None

    def test_create_user_duplicate_email(self, db, make_user):
        make_user(username="first", email="same@example.com")

        with pytest.raises(DuplicateUserError, match="already exists"):
            user_service.create_user(db, email="same@example.com", username="second", hashed_password="h")

    def test_create_user_duplicate_username(self, db, make_user):
        make_user(username="taken")

        with pytest.raises(DuplicateUserError, match="Username is already taken."):
            user_service.create_user(db, email="other@example.com", username="taken", hashed_password="h")

    def test_update_profile(self, db, make_user):
        user = make_user(username="oldname")

        updated = user_service.update_profile(db, user.id, UserProfileUpdate(username="newname", in_game_name="NN_Sniper"))

        assert updated.username == "newname"
        assert updated.in_game_name == "NN_Sniper"

    def test_update_profile_keeps_unset_fields(self, db, make_user):
        user = make_user(username="keepme")
        user_service.update_profile(db, user.id, UserProfileUpdate(in_game_name="IGN"))

        updated = user_service.update_profile(db, user.id, UserProfileUpdate(in_game_name="IGN2"))
        assert updated.username == "keepme"
        assert updated.in_game_name == "IGN2"

    def test_update_profile_username_taken(self, db, make_user):
        make_user(username="alpha")
        user = make_user(username="beta")

        with pytest.raises(DuplicateUserError):
            user_service.update_profile(db, user.id, UserProfileUpdate(username="alpha"))

    def test_update_profile_unknown_user(self, db):
        with pytest.raises(NotFoundError):
            user_service.update_profile(db, "ghost", UserProfileUpdate(username="ghost"))

    def test_stats_without_matches(self, db, make_user):
        stats = user_service.get_user_stats(db, make_user().id)

        assert stats.matches_played == 0
        assert stats.wins == 0
        assert stats.win_percentage == 0.0

    def test_stats_aggregate_results(self, db, make_user, make_tournament):
        user = make_user(balance="0")
        results = [(1, 8, "300"), (4, 2, "0"), (2, 5, "100")]
        for rank, kills, winnings in results:
            tournament = make_tournament(entry_fee="0")
            tournament_service.join_tournament(db, tournament.id, user.id)
            participant = db.get(Participant, (tournament.id, user.id))
            participant.rank, participant.kills, participant.winnings = rank, kills, Decimal(winnings)
            db.commit()

        stats = user_service.get_user_stats(db, user.id)

        assert stats.matches_played == 3
        assert stats.total_kills == 15
        assert stats.total_winnings == Decimal("400")
        assert stats.wins == 1
        assert stats.win_percentage == 33.3
