"""Tests for video CRUD and like/dislike flows."""

from __future__ import annotations

from bson import ObjectId

from tests.helpers import auth_header, post_comment, register, upload_video

BASE = "/api/v1/videos"


async def test_create_video_links_uploader(client):
    user_id, token = await register(client)
    video = await upload_video(client, token, tags=["cats"])

    assert video["owner_id"] == user_id
    assert video["likes"] == 0 and video["liked_by"] == []
    assert video["dislikes"] == 0 and video["disliked_by"] == []

    me = (await client.get("/api/v1/auth/me",
                           headers=auth_header(token))).json()["user"]
    assert me["videos"] == [video["id"]]


async def test_create_video_without_url_returns_400(client):
    _, token = await register(client)
    r = await client.post(BASE, json={"title": "x"},
                          headers=auth_header(token))
    assert r.status_code == 400


async def test_list_videos_filters_and_paginates(client):
    _, token = await register(client)
    for i in range(3):
        await upload_video(client, token, title=f"Cat video {i}",
                           category="Pets")
    await upload_video(client, token, title="Dog", category="Pets",
                       tags=["dogs"])
    await upload_video(client, token, title="Hidden", status="draft")

    r = await client.get(f"{BASE}?page=1&limit=2")
    body = r.json()
    assert r.status_code == 200
    assert body["total"] == 4 and body["pages"] == 2
    assert body["count"] == 2

    cats = (await client.get(f"{BASE}?search=cat")).json()
    assert cats["total"] == 3

    tagged = (await client.get(f"{BASE}?search=dogs")).json()
    assert [v["title"] for v in tagged["videos"]] == ["Dog"]


async def test_get_video_increments_views(client):
    _, token = await register(client)
    video = await upload_video(client, token)

    await client.get(f"{BASE}/{video['id']}")
    r = await client.get(f"{BASE}/{video['id']}")
    assert r.status_code == 200
    assert r.json()["video"]["views"] == 2
    assert r.json()["owner"]["name"] == "user"


async def test_get_missing_or_malformed_video_returns_404(client):
    assert (await client.get(f"{BASE}/{ObjectId()}")).status_code == 404
    r = await client.get(f"{BASE}/not-an-id")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "video_not_found"}


async def test_like_then_like_again_toggles_off(client):
    _, owner = await register(client, "owner")
    fan_id, fan = await register(client, "fan")
    video = await upload_video(client, owner)

    r = await client.put(f"{BASE}/{video['id']}/like",
                         headers=auth_header(fan))
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["video"]["liked_by"] == [fan_id]
    assert body["video"]["likes"] == 1

    r = await client.put(f"{BASE}/{video['id']}/like",
                         headers=auth_header(fan))
    assert r.json()["video"]["liked_by"] == []
    assert r.json()["video"]["likes"] == 0


async def test_dislike_after_like_moves_reaction(client):
    _, owner = await register(client, "owner")
    fan_id, fan = await register(client, "fan")
    video = await upload_video(client, owner)

    await client.put(f"{BASE}/{video['id']}/like", headers=auth_header(fan))
    r = await client.put(f"{BASE}/{video['id']}/dislike",
                         headers=auth_header(fan))
    v = r.json()["video"]
    assert v["liked_by"] == [] and v["likes"] == 0
    assert v["disliked_by"] == [fan_id] and v["dislikes"] == 1


async def test_like_syncs_users_liked_videos(client):
    _, owner = await register(client, "owner")
    _, fan = await register(client, "fan")
    video = await upload_video(client, owner)

    async def liked_videos():
        r = await client.get("/api/v1/auth/me", headers=auth_header(fan))
        return r.json()["user"]["liked_videos"]

    await client.put(f"{BASE}/{video['id']}/like", headers=auth_header(fan))
    assert await liked_videos() == [video["id"]]

    await client.put(f"{BASE}/{video['id']}/dislike",
                     headers=auth_header(fan))
    assert await liked_videos() == []


async def test_two_actors_counted_independently(client):
    _, owner = await register(client, "owner")
    _, a = await register(client, "a")
    _, b = await register(client, "b")
    video = await upload_video(client, owner)

    await client.put(f"{BASE}/{video['id']}/like", headers=auth_header(a))
    await client.put(f"{BASE}/{video['id']}/dislike", headers=auth_header(b))
    r = await client.put(f"{BASE}/{video['id']}/like",
                         headers=auth_header(b))
    v = r.json()["video"]
    assert v["likes"] == 2 and v["dislikes"] == 0


async def test_like_on_legacy_document_with_string_duration(client, db):
    user_id, token = await register(client)
    vid = ObjectId()
    await db["videos"].insert_one({
        "_id": vid,
        "title": "old upload",
        "video_url": "https://cdn.test/old.mp4",
        "owner_id": ObjectId(),
        "duration": "3:25",
        "liked_by": "corrupted",
        "status": "published",
    })

    r = await client.put(f"{BASE}/{vid}/like", headers=auth_header(token))
    assert r.status_code == 200
    v = r.json()["video"]
    assert v["duration"] == 205
    assert v["liked_by"] == [user_id] and v["likes"] == 1
    assert v["disliked_by"] == [] and v["dislikes"] == 0

    stored = await db["videos"].find_one({"_id": vid})
    # the toggle writes only the reaction fields
    assert stored["duration"] == "3:25"


async def test_like_missing_video_returns_404(client):
    _, token = await register(client)
    r = await client.put(f"{BASE}/{ObjectId()}/like",
                         headers=auth_header(token))
    assert r.status_code == 404


async def test_update_video_by_owner_and_stranger(client):
    _, owner = await register(client, "owner")
    _, stranger = await register(client, "stranger")
    video = await upload_video(client, owner)

    r = await client.put(f"{BASE}/{video['id']}", json={"title": "new"},
                         headers=auth_header(stranger))
    assert r.status_code == 403
    assert r.json()["message"] == "not_video_owner"

    r = await client.put(f"{BASE}/{video['id']}", json={"title": "new"},
                         headers=auth_header(owner))
    assert r.status_code == 200
    assert r.json()["video"]["title"] == "new"
    assert r.json()["video"]["video_url"] == video["video_url"]


async def test_delete_video_cascades(client, db):
    owner_id, owner = await register(client, "owner")
    _, fan = await register(client, "fan")
    video = await upload_video(client, owner)
    await client.put(f"{BASE}/{video['id']}/like", headers=auth_header(fan))
    await post_comment(client, fan, video["id"])

    r = await client.delete(f"{BASE}/{video['id']}",
                            headers=auth_header(fan))
    assert r.status_code == 403

    r = await client.delete(f"{BASE}/{video['id']}",
                            headers=auth_header(owner))
    assert r.status_code == 200 and r.json()["success"] is True

    assert (await client.get(f"{BASE}/{video['id']}")).status_code == 404
    assert await db["comments"].count_documents({}) == 0
    fan_me = (await client.get("/api/v1/auth/me",
                               headers=auth_header(fan))).json()["user"]
    assert fan_me["liked_videos"] == []
    owner_doc = await db["users"].find_one({"_id": ObjectId(owner_id)})
    assert owner_doc["videos"] == []


async def test_list_user_videos(client):
    user_id, token = await register(client)
    await upload_video(client, token)
    await upload_video(client, token, status="private")
    r = await client.get(f"{BASE}/user/{user_id}")
    assert r.status_code == 200
    assert r.json()["count"] == 2
