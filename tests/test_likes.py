import pytest

from conftest import auth_headers, seed_user


@pytest.fixture()
def alice(db_session):
    return seed_user(db_session)


@pytest.fixture()
def bob(db_session):
    return seed_user(db_session, username="bob", email="bob@example.com")


@pytest.fixture()
def tweet_id(client, alice):
    resp = client.post("/tweets/new", json={"message": "like me"}, headers=auth_headers(alice))
    return resp.json()["tweet"]["id"]


def test_like_tweet(client, bob, tweet_id):
    resp = client.post(f"/tweets/{tweet_id}/like", headers=auth_headers(bob))
    assert resp.status_code == 201
    assert resp.json()["nbLikes"] == 1


def test_like_shows_in_feed(client, alice, bob, tweet_id):
    client.post(f"/tweets/{tweet_id}/like", headers=auth_headers(bob))

    seen_by_bob = client.get("/tweets", headers=auth_headers(bob)).json()["lastTweets"][0]
    assert seen_by_bob["nbLikes"] == 1
    assert seen_by_bob["liked"] is True

    seen_by_alice = client.get("/tweets", headers=auth_headers(alice)).json()["lastTweets"][0]
    assert seen_by_alice["nbLikes"] == 1
    assert seen_by_alice["liked"] is False


def test_cannot_like_twice(client, bob, tweet_id):
    client.post(f"/tweets/{tweet_id}/like", headers=auth_headers(bob))
    resp = client.post(f"/tweets/{tweet_id}/like", headers=auth_headers(bob))
    assert resp.status_code == 409
    assert resp.json()["result"] is False


def test_cannot_like_own_tweet(client, alice, tweet_id):
    resp = client.post(f"/tweets/{tweet_id}/like", headers=auth_headers(alice))
    assert resp.status_code == 403


def test_like_missing_tweet(client, bob):
    resp = client.post("/tweets/999/like", headers=auth_headers(bob))
    assert resp.status_code == 404


def test_unlike_tweet(client, bob, tweet_id):
    client.post(f"/tweets/{tweet_id}/like", headers=auth_headers(bob))
    resp = client.delete(f"/tweets/{tweet_id}/like", headers=auth_headers(bob))
    assert resp.status_code == 200
    assert resp.json()["nbLikes"] == 0

    again = client.delete(f"/tweets/{tweet_id}/like", headers=auth_headers(bob))
    assert again.status_code == 404
