"""Customer review endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.auth import current_user, require_admin
from storefront.db.session import get_db
from storefront.models import Review, User
from storefront.schemas.review import ReviewCreate, ReviewResponse

router: APIRouter = APIRouter()


def _get_review_or_404(db: Session, review_id: int) -> Review:
    review = db.get(Review, review_id)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    return review


@router.get("", response_model=list[ReviewResponse])
def get_approved_reviews(db: Session = Depends(get_db)) -> list[Review]:
    stmt = select(Review).where(Review.is_approved.is_(True)).order_by(Review.created_at.desc(), Review.id.desc())
    return list(db.scalars(stmt).all())


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(payload: ReviewCreate, db: Session = Depends(get_db), user: User = Depends(current_user)) -> Review:
    """New reviews stay hidden until an admin approves them."""
    review = Review(
        user_id=user.id,
        customer_name=user.name or user.username,
        rating=payload.rating,
        content=payload.content.strip(),
        is_approved=False,
    )
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


@router.get("/all", response_model=list[ReviewResponse], dependencies=[Depends(require_admin)])
def get_all_reviews(db: Session = Depends(get_db)) -> list[Review]:
    return list(db.scalars(select(Review).order_by(Review.created_at.desc(), Review.id.desc())).all())


@router.post("/{review_id}/approve", response_model=ReviewResponse, dependencies=[Depends(require_admin)])
def approve_review(review_id: int, db: Session = Depends(get_db)) -> Review:
    review = _get_review_or_404(db, review_id)
    review.is_approved = True
    db.commit()
    db.refresh(review)
    return review


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_review(review_id: int, db: Session = Depends(get_db)) -> None:
    db.delete(_get_review_or_404(db, review_id))
    db.commit()
