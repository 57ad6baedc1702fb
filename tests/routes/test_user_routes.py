from decimal import Decimal

from fastapi.testclient import TestClient

from tourney.models.participant import Participant


class TestUserRoutes:

    def test_read_me(self, client: TestClient, make_user, auth_headers):
        user = make_user(balance="42", username="scout")

        response = client.get("/users/me", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user.id
        assert data["username"] == "scout"
        assert data["role"] == "User"
        assert data["is_banned"] is False
        assert "hashed_password" not in data

    def test_update_profile(self, client: TestClient, make_user, auth_headers):
        user = make_user(username="scout")

        response = client.patch("/users/me", json={"in_game_name": "ScoutOP"}, headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["in_game_name"] == "ScoutOP"
        assert response.json()["username"] == "scout"

    def test_update_profile_username_taken(self, client: TestClient, make_user, auth_headers):
        make_user(username="alpha")
        user = make_user(username="beta")

        response = client.patch("/users/me", json={"username": "alpha"}, headers=auth_headers(user))

        assert response.status_code == 409

    def test_in_game_name_used_when_joining(self, client: TestClient, make_user, make_tournament, auth_headers):
        user = make_user(balance="0", username="scout")
        tournament = make_tournament(entry_fee="0")
        client.patch("/users/me", json={"in_game_name": "ScoutOP"}, headers=auth_headers(user))

        response = client.post(f"/tournaments/{tournament.id}/join", headers=auth_headers(user))

        assert response.status_code == 201
        assert response.json()["in_game_name"] == "ScoutOP"

    def test_stats(self, client: TestClient, db, make_user, make_tournament, auth_headers):
        user = make_user(balance="100")
        tournament = make_tournament(entry_fee="10")
        client.post(f"/tournaments/{tournament.id}/join", headers=auth_headers(user))
        participant = db.get(Participant, (tournament.id, user.id))
        participant.rank, participant.kills, participant.winnings = 1, 6, Decimal("250")
        db.commit()

        response = client.get("/users/me/stats", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert data["matches_played"] == 1
        assert data["wins"] == 1
        assert data["total_kills"] == 6
        assert Decimal(data["total_winnings"]) == Decimal("250")
        assert data["win_percentage"] == 100.0
