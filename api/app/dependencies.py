"""
FastAPI dependencies - services wired to the request's database and catalog
"""
from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.repositories import ListRepository, UserRepository
from app.services.destination_catalog import DestinationCatalog, get_catalog
from app.services.list_service import ListService
from app.services.membership_service import MembershipService
from app.services.review_service import ReviewService
from app.services.user_service import AccountService, AdminService
from app.utils.mongodb import get_mongodb


def get_list_repository(db: AsyncIOMotorDatabase = Depends(get_mongodb)) -> ListRepository:
    return ListRepository(db)


def get_user_repository(db: AsyncIOMotorDatabase = Depends(get_mongodb)) -> UserRepository:
    return UserRepository(db)


def get_list_service(repository: ListRepository = Depends(get_list_repository)) -> ListService:
    return ListService(repository)


def get_review_service(repository: ListRepository = Depends(get_list_repository)) -> ReviewService:
    return ReviewService(repository)


def get_membership_service(
    repository: ListRepository = Depends(get_list_repository),
    catalog: DestinationCatalog = Depends(get_catalog),
) -> MembershipService:
    return MembershipService(repository, catalog)


def get_account_service(repository: UserRepository = Depends(get_user_repository)) -> AccountService:
    return AccountService(repository)


def get_admin_service(repository: UserRepository = Depends(get_user_repository)) -> AdminService:
    return AdminService(repository)
