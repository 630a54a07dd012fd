import pytest

from conftest import detail
from repositories.donations import DonationRepository
from repositories.favorites import FavoriteRepository
from repositories.profile import ProfileRepository
from repositories.user import UserRepository
from schemas.donation import DonationCreate
from schemas.places import Place
from services import authentication_service
from services.exceptions import AccountExists, InvalidCredentials


@pytest.mark.asyncio
async def test_register_normalizes_email_and_hashes_password(db):
    user = await authentication_service.register(db, " Sam ", "Sam@Example.COM ", "s3cret")

    assert user.email == "sam@example.com"
    assert user.name == "Sam"
    assert user.password_hash != "s3cret"


@pytest.mark.asyncio
async def test_register_rejects_duplicate_and_blank(db):
    await authentication_service.register(db, "Sam", "sam@example.com", "s3cret")

    with pytest.raises(AccountExists):
        await authentication_service.register(db, "Other", "SAM@example.com", "pw")
    with pytest.raises(InvalidCredentials):
        await authentication_service.register(db, "  ", "new@example.com", "pw")


@pytest.mark.asyncio
async def test_login_checks_password(db):
    await authentication_service.register(db, "Sam", "sam@example.com", "s3cret")

    user = await authentication_service.login(db, "SAM@example.com", "s3cret")
    assert user.email == "sam@example.com"

    with pytest.raises(InvalidCredentials):
        await authentication_service.login(db, "sam@example.com", "wrong")
    with pytest.raises(InvalidCredentials):
        await authentication_service.login(db, "nobody@example.com", "s3cret")


@pytest.mark.asyncio
async def test_reset_password(db):
    await authentication_service.register(db, "Sam", "sam@example.com", "old")
    await authentication_service.reset_password(db, "sam@example.com", "new")

    assert await authentication_service.login(db, "sam@example.com", "new")
    with pytest.raises(InvalidCredentials):
        await authentication_service.login(db, "sam@example.com", "old")
    with pytest.raises(InvalidCredentials):
        await authentication_service.reset_password(db, "nobody@example.com", "new")


@pytest.mark.asyncio
async def test_reset_password_rejects_blank_password(db):
    await authentication_service.register(db, "Sam", "sam@example.com", "old")

    with pytest.raises(InvalidCredentials):
        await authentication_service.reset_password(db, "sam@example.com", "   ")

    assert await authentication_service.login(db, "sam@example.com", "old")
    with pytest.raises(InvalidCredentials):
        await authentication_service.login(db, "sam@example.com", "   ")


@pytest.mark.asyncio
async def test_delete_account_removes_user_data(db):
    user = await authentication_service.register(db, "Sam", "sam@example.com", "pw")
    keeper = await authentication_service.register(db, "Kim", "kim@example.com", "pw")
    d = detail("p1", 500)
    place = Place(id="p1", name=d.name, coordinate=d.coordinate)

    for owner in (user, keeper):
        await FavoriteRepository(db).toggle(owner.id, place)
        await DonationRepository(db).create(owner.id, DonationCreate(charity_name="Food Bank", amount="5"))
        await ProfileRepository(db).upsert(owner.id, owner.name, owner.email)
    user_id, keeper_id = user.id, keeper.id

    with pytest.raises(InvalidCredentials):
        await authentication_service.delete_account(db, "sam@example.com", "wrong")

    await authentication_service.delete_account(db, "sam@example.com", "pw")

    assert await UserRepository(db).get_by_email("sam@example.com") is None
    assert await FavoriteRepository(db).list_for_user(user_id) == []
    assert await DonationRepository(db).list_for_user(user_id) == []
    assert await ProfileRepository(db).get_for_user(user_id) is None
    assert len(await FavoriteRepository(db).list_for_user(keeper_id)) == 1
    assert await ProfileRepository(db).get_for_user(keeper_id) is not None
