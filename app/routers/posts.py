from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.config import PAGE_SIZE
from app.database import get_db
from app.repositories.post import PostRepository
from app.schemas.post import PostCreate, PostOut, PostPage, PostUpdate
from app.utils.errors import failure_boundary, format_validation_errors
from app.utils.responses import not_found_response, success_response, validation_error_response

router = APIRouter(prefix="/posts", tags=["Posts"])

MAX_ID = 2 ** 63 - 1
# Última página cuyo offset todavía cabe en un entero de la base de datos
MAX_PAGE = MAX_ID // PAGE_SIZE


def resolve_page(page: Optional[str]) -> int:
    """Una página ausente, inválida o menor que 1 es la página 1"""
    if page is None or not page.isdecimal():
        return 1
    return min(max(1, int(page)), MAX_PAGE)


def find_post(repo: PostRepository, post_id: str):
    # Un id mal formado se trata igual que un id inexistente
    if not post_id.isdecimal() or int(post_id) > MAX_ID:
        return None
    return repo.get(int(post_id))


@router.get("")
@failure_boundary("Error while fetching the posts")
def list_posts(page: Optional[str] = None, db: Session = Depends(get_db)):
    repo = PostRepository(db)
    current_page = resolve_page(page)
    total = repo.count()
    posts = repo.page(offset=(current_page - 1) * PAGE_SIZE, limit=PAGE_SIZE)
    data = PostPage.build(posts, total=total, page=current_page, per_page=PAGE_SIZE)
    return success_response("Posts fetched successfully", data)


@router.post("", status_code=201)
@failure_boundary("Error while creating the post")
def create_post(post: PostCreate, db: Session = Depends(get_db)):
    new_post = PostRepository(db).create(post.model_dump())
    return success_response("Post created successfully", PostOut.model_validate(new_post), status_code=201)


@router.get("/{post_id}")
@failure_boundary("Error while fetching the post")
def get_post(post_id: str, db: Session = Depends(get_db)):
    post = find_post(PostRepository(db), post_id)
    if not post:
        return not_found_response()
    return success_response("Post fetched successfully", PostOut.model_validate(post))


@router.api_route("/{post_id}", methods=["PUT", "PATCH"])
@failure_boundary("Error while updating the post")
def update_post(post_id: str, payload: Any = Body(None), db: Session = Depends(get_db)):
    repo = PostRepository(db)
    post = find_post(repo, post_id)
    if not post:
        return not_found_response()

    # Se valida después de comprobar que el post existe
    try:
        changes = PostUpdate.model_validate({} if payload is None else payload).changes()
    except ValidationError as e:
        return validation_error_response(format_validation_errors(e.errors()))

    post = repo.update(post, changes)
    return success_response("Post updated successfully", PostOut.model_validate(post))


@router.delete("/{post_id}")
@failure_boundary("Error while deleting the post")
def delete_post(post_id: str, db: Session = Depends(get_db)):
    repo = PostRepository(db)
    post = find_post(repo, post_id)
    if not post:
        return not_found_response()

    repo.delete(post)
    return success_response("Post deleted successfully")
