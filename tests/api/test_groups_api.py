"""
Tests for group API endpoints.
"""

API = "/api/v1"


def _register(client, *names):
    response = client.post(f"{API}/players/bulk", json={"names": list(names)})
    assert response.status_code == 200


class TestGroupsAPI:
    """Test group API endpoints."""

    def test_create_group_success(self, test_client):
        """Test creating a group of registered players."""
        _register(test_client, "Ann", "Ben", "Cat")

        response = test_client.post(f"{API}/groups/", json={"name": "Smiths", "players": ["Ann", "Ben", "Cat"]})

        assert response.status_code == 200
        group = response.json()
        assert group["name"] == "Smiths"
        assert group["players"] == ["Ann", "Ben", "Cat"]
        assert isinstance(group["id"], int)

        listed = test_client.get(f"{API}/groups/").json()
        assert [g["name"] for g in listed] == ["Smiths"]

    def test_create_group_unregistered_player(self, test_client):
        _register(test_client, "Ann")

        response = test_client.post(f"{API}/groups/", json={"name": "Pair", "players": ["Ann", "Ghost"]})

        assert response.status_code == 404
        assert response.json()["detail"]["failure"] == "player_not_found"

    def test_create_group_wrong_size(self, test_client):
        _register(test_client, "Ann")

        response = test_client.post(f"{API}/groups/", json={"name": "Solo", "players": ["Ann"]})

        assert response.status_code == 409
        assert response.json()["detail"]["failure"] == "group_size_mismatch"

    def test_create_group_player_already_grouped(self, test_client):
        _register(test_client, "Ann", "Ben", "Cat")
        test_client.post(f"{API}/groups/", json={"name": "Pair", "players": ["Ann", "Ben"]})

        response = test_client.post(f"{API}/groups/", json={"name": "Other", "players": ["Ben", "Cat"]})

        assert response.status_code == 409
        assert response.json()["detail"]["failure"] == "player_already_in_group"

    def test_enqueue_group(self, test_client):
        """Test queueing a group replaces its members' individual entries."""
        test_client.post(f"{API}/queue/join", json={"name": "Ann"})
        _register(test_client, "Ben")
        group = test_client.post(f"{API}/groups/", json={"name": "Pair", "players": ["Ann", "Ben"]}).json()

        response = test_client.post(f"{API}/groups/{group['id']}/enqueue")

        assert response.status_code == 200
        entry = response.json()
        assert entry["type"] == "group"
        assert entry["players"] == ["Ann", "Ben"]

        queue = test_client.get(f"{API}/queue/").json()
        assert len(queue) == 1
        assert queue[0]["entry"]["name"] == "Pair"

        again = test_client.post(f"{API}/groups/{group['id']}/enqueue")
        assert again.status_code == 409

    def test_delete_group(self, test_client):
        _register(test_client, "Ann", "Ben")
        group = test_client.post(f"{API}/groups/", json={"name": "Pair", "players": ["Ann", "Ben"]}).json()
        test_client.post(f"{API}/groups/{group['id']}/enqueue")

        response = test_client.delete(f"{API}/groups/{group['id']}")

        assert response.status_code == 200
        assert test_client.get(f"{API}/groups/").json() == []
        assert test_client.get(f"{API}/queue/").json() == []

    def test_delete_unknown_group(self, test_client):
        response = test_client.delete(f"{API}/groups/12345")

        assert response.status_code == 404
        assert response.json()["detail"]["failure"] == "group_not_found"
