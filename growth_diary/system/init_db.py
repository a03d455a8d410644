# growth_diary/system/init_db.py
import argparse

from growth_diary.core.database import engine, init_database, reset_database


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the Personal Growth Diary database schema.")
    parser.add_argument("--reset", action="store_true", help="drop every table before recreating it")
    args = parser.parse_args(argv)

    if args.reset:
        print("⚠️ Dropping all tables...")
        reset_database(engine)
    else:
        print("🚀 Creating missing tables...")
        init_database(engine)
    print(f"✅ Database ready at {engine.url}")


if __name__ == "__main__":
    main()
