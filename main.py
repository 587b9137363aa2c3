# main.py
import argparse
import subprocess
import os
import sys


def run_app():
    """Run the Streamlit app"""
    try:
        subprocess.run([
            "streamlit", "run",
            os.path.join("frontend", "app.py")
        ], check=True)
    except subprocess.CalledProcessError as e:
        print(f"Error running Streamlit app: {e}")
        sys.exit(1)


def create_advisor(args):
    from advisor_desk.services.auth import AuthService
    from advisor_desk.services.errors import StoreWriteError

    try:
        advisor = AuthService().create_advisor(args.email, args.password, args.name)
    except (ValueError, StoreWriteError) as e:
        print(f"Could not create advisor: {e}")
        sys.exit(1)
    print(f"Created advisor {advisor.email} ({advisor.id})")


def seed(args):
    from advisor_desk.services.store import StudentStore
    from advisor_desk.services.seed import seed_students, seed_activity

    store = StudentStore()
    if args.students:
        seed_students(store, args.students)
        print(f"Seeded {args.students} students")
    if args.activity:
        writes = seed_activity(store, args.activity)
        print(f"Seeded activity ({writes} writes)")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Advisor dashboard")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("run", help="Start the Streamlit dashboard (default)")

    p_advisor = sub.add_parser("create-advisor", help="Create an advisor sign-in")
    p_advisor.add_argument("--email", required=True)
    p_advisor.add_argument("--password", required=True)
    p_advisor.add_argument("--name")

    p_seed = sub.add_parser("seed", help="Populate MongoDB with demo data")
    p_seed.add_argument("--students", type=int, default=0, help="Number of students to create")
    p_seed.add_argument("--activity", type=int, default=0, help="Number of students to enrich")

    args = parser.parse_args(argv)

    from advisor_desk.logger import setup_logging
    setup_logging()

    if args.command == "create-advisor":
        create_advisor(args)
    elif args.command == "seed":
        seed(args)
    else:
        run_app()


if __name__ == "__main__":
    main()
