from pymongo import MongoClient, ASCENDING, DESCENDING
from videotube_api.core.config import settings


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]

    print("Using DSN:", settings.mongo_dsn, "DB:", settings.mongo_db)
    # users
    db["users"].create_index(
        [("email", ASCENDING)], unique=True, name="users_email"
    )

    # channels: one per owner, unique display name
    db["channels"].create_index(
        [("owner_id", ASCENDING)], unique=True, name="channels_owner"
    )
    db["channels"].create_index(
        [("channel_name", ASCENDING)], unique=True, name="channels_name"
    )

    # videos: public feed and per-uploader listing
    db["videos"].create_index(
        [("status", ASCENDING), ("created_at", DESCENDING)],
        name="videos_status_created_desc"
    )
    db["videos"].create_index(
        [("owner_id", ASCENDING), ("created_at", DESCENDING)],
        name="videos_owner_created_desc"
    )
    db["videos"].create_index(
        [("category", ASCENDING), ("created_at", DESCENDING)],
        name="videos_category_created_desc"
    )

    # comments: top-level threads of a video
    db["comments"].create_index(
        [("video_id", ASCENDING),
         ("parent_comment_id", ASCENDING),
         ("created_at", DESCENDING)],
        name="comments_video_parent_created_desc"
    )
    db["comments"].create_index(
        [("parent_comment_id", ASCENDING)], name="comments_parent"
    )

    print("Indexes ensured.")


if __name__ == "__main__":
    main()
