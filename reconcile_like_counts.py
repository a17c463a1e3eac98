"""
Recompute every post's like_count from the post_likes rows.
Run: python reconcile_like_counts.py
"""

import logging

from minisocial.crud import crud_post_like
from minisocial.database import SessionLocal


def main():
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        fixed = crud_post_like.reconcile_like_counts(db)
        print(f"Reconciled like_count on {fixed} post(s)")
    finally:
        db.close()


if __name__ == "__main__":
    main()
