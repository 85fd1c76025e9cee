#!/usr/bin/env python3
"""
Seed the database with sample users and articles.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from news_curator.models import ArticleCreate, ArticleModel, UserCreate
from news_curator.storage.database import get_db
from news_curator.storage.repositories import ArticleRepository, UserRepository


SAMPLE_USERS = [
    {"username": "ada", "interests": ["ai", "programming"]},
    {"username": "grace", "interests": ["compilers", "history"]},
]

SAMPLE_ARTICLES = [
    {
        "title": "Machine learning in the clinic",
        "author": "Jane Doe",
        "tags": ["ai", "healthcare"],
        "content": (
            "Hospitals are adopting machine learning models to triage patients. "
            "The models flag patients whose vital signs suggest rapid deterioration. "
            "Clinicians still make the final call on every flagged patient. "
            "Early results show shorter waits for the most urgent cases."
        ),
    },
    {
        "title": "A short history of compilers",
        "author": "John Roe",
        "tags": ["compilers", "history"],
        "content": (
            "The first compilers translated formulas into machine code for scientific work. "
            "Optimizing compilers soon rivaled hand-written assembly in speed. "
            "Today most programmers never look at the code their compiler emits. "
            "Yet compiler design still shapes how every language feels to use."
        ),
    },
]


def main() -> None:
    """Seed the database with sample users and articles."""
    import argparse

    parser = argparse.ArgumentParser(description="Seed database with sample users and articles")
    parser.add_argument("--clear", action="store_true", help="Clear existing articles before seeding")
    args = parser.parse_args()

    with get_db() as session:
        if args.clear:
            print("Clearing existing articles...")
            session.query(ArticleModel).delete()
            session.commit()

        user_repo = UserRepository(session)
        for user_data in SAMPLE_USERS:
            if user_repo.get_by_username(user_data["username"]):
                print(f"User already exists: {user_data['username']}")
                continue
            user_repo.create(UserCreate(**user_data))
            print(f"Added user: {user_data['username']}")

        article_repo = ArticleRepository(session)
        for article_data in SAMPLE_ARTICLES:
            if article_repo.search(query=article_data["title"], limit=1):
                print(f"Article already exists: {article_data['title']}")
                continue
            article_repo.create(ArticleCreate(**article_data))
            print(f"Added article: {article_data['title']}")

        session.commit()

        print(f"\nTotal articles in database: {article_repo.count()}")


if __name__ == "__main__":
    main()
