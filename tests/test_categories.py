from accounthub.categories.service import DEFAULT_CATEGORIES, seed_default_categories


def test_seed_only_when_empty(db):
    assert seed_default_categories(db) == len(DEFAULT_CATEGORIES)
    assert seed_default_categories(db) == 0


def test_list_sorted_by_name(client, categories):
    r = client.get("/api/categories")
    assert r.status_code == 200
    names = [c["name"] for c in r.json()]
    assert names == sorted(n for n, _ in DEFAULT_CATEGORIES)
    assert set(r.json()[0]) == {"id", "name", "description"}


def test_empty_list(client):
    assert client.get("/api/categories").json() == []
