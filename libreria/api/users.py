from fastapi import APIRouter, Depends, Response, status

from libreria.api.deps import get_user_service
from libreria.schemas.user import UserRequest, UserResponse
from libreria.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserRequest, service: UserService = Depends(get_user_service)):
    return await service.create_user(request.name, request.email)


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, request: UserRequest, service: UserService = Depends(get_user_service)):
    return await service.update_user(user_id, request.name, request.email)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
