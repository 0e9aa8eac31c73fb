from fastapi import APIRouter, Depends, Response, status

from libreria.api.deps import get_book_service
from libreria.schemas.book import BookRequest, BookResponse, BookUpdateRequest
from libreria.services.books import BookService

router = APIRouter(prefix="/api/books", tags=["books"])


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(request: BookRequest, service: BookService = Depends(get_book_service)):
    return await service.create_book(
        request.external_id,
        request.title,
        request.price,
        request.stock_quantity,
        request.available_quantity,
    )


@router.get("", response_model=list[BookResponse])
async def list_books(service: BookService = Depends(get_book_service)):
    return await service.list_books()


@router.get("/{external_id}", response_model=BookResponse)
async def get_book(external_id: int, service: BookService = Depends(get_book_service)):
    """Look a book up by its catalog (external) id."""
    return await service.get_book(external_id)


@router.put("/{external_id}", response_model=BookResponse)
async def update_book(
    external_id: int,
    request: BookUpdateRequest,
    service: BookService = Depends(get_book_service),
):
    return await service.update_book(external_id, request.title, request.price, request.stock_quantity)


@router.delete("/{external_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(external_id: int, service: BookService = Depends(get_book_service)):
    await service.delete_book(external_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
