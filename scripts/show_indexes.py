from pymongo import MongoClient
from movierama_api.core.config import settings


def dump(col_name: str):
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]
    print(f"\nIndexes in '{col_name}':")
    for i in db[col_name].list_indexes():
        print(" -", i["name"], dict(i["key"]),
              "unique" if i.get("unique") else "")


if __name__ == "__main__":
    dump("movies")
