"""Repair counter drift: recompute likes/hates from each movie's reactions.

Run while no reaction writes are in flight for the affected movies,
otherwise a pending $inc lands on top of the recounted value.
"""
import argparse

from bson import ObjectId
from pymongo import MongoClient
from movierama_api.core.config import settings
from movierama_api.models.reactions import ReactionKind
from movierama_api.services.repositories.movies_repo import (
    reaction_count_expr,
)


def drift_pipeline() -> list:
    """Movies whose stored counters disagree with their reactions."""
    return [
        {"$project": {
            "likes": 1, "hates": 1,
            "true_likes": reaction_count_expr(ReactionKind.like),
            "true_hates": reaction_count_expr(ReactionKind.hate),
        }},
        {"$match": {"$expr": {"$or": [
            {"$ne": ["$likes", "$true_likes"]},
            {"$ne": ["$hates", "$true_hates"]},
        ]}}},
    ]


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true",
                        help="only report drifted movies")
    parser.add_argument("--movie-id", help="recount a single movie")
    args = parser.parse_args()

    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]
    col = db["movies"]

    pipeline = drift_pipeline()
    if args.movie_id:
        pipeline.insert(0, {"$match": {"_id": ObjectId(args.movie_id)}})

    drifted = list(col.aggregate(pipeline))
    print(f"Drifted movies: {len(drifted)}")

    for d in drifted:
        print(f"  {d['_id']}: likes {d['likes']} -> {d['true_likes']}, "
              f"hates {d['hates']} -> {d['true_hates']}")
        if args.dry_run:
            continue
        col.update_one(
            {"_id": d["_id"]},
            [{"$set": {"likes": reaction_count_expr(ReactionKind.like),
                       "hates": reaction_count_expr(ReactionKind.hate)}}],
        )

    print("Recount done." if not args.dry_run else "Dry run, nothing changed.")


if __name__ == "__main__":
    main()
