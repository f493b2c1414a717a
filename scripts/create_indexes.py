from pymongo import MongoClient, ASCENDING, DESCENDING
from movierama_api.core.config import settings


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]

    print("Using DSN:", settings.mongo_dsn, "DB:", settings.mongo_db)
    movies = db["movies"]

    # one movie per title
    movies.create_index([("title", ASCENDING)],
                        unique=True, name="movies_title")

    # "movies of user" listing
    movies.create_index(
        [("published_by", ASCENDING), ("published_at", DESCENDING)],
        name="movies_publisher_published_desc"
    )

    # listing sorts: newest, most liked, most hated
    movies.create_index([("published_at", DESCENDING)],
                        name="movies_published_desc")
    movies.create_index(
        [("likes", DESCENDING), ("published_at", DESCENDING)],
        name="movies_likes_desc"
    )
    movies.create_index(
        [("hates", DESCENDING), ("published_at", DESCENDING)],
        name="movies_hates_desc"
    )

    print("Indexes ensured.")


if __name__ == "__main__":
    main()
