"""FastAPI endpoints for sign-in, the user profile, the address book and favorites."""

from urllib.parse import urlencode

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api import views
from storefront.api.schemas import (
    AddAddressRequest,
    AddFavoriteRequest,
    AddressResponse,
    ClearFavoritesResponse,
    FavoriteCheckResponse,
    FavoriteResponse,
    FavoritesResponse,
    GoogleTokenRequest,
    LoginResponse,
    ProfileResponse,
    StatusResponse,
    UpdateAddressRequest,
    UpdateProfileRequest,
)
from storefront.auth.dependencies import authenticated_user
from storefront.auth.identity import get_identity_provider
from storefront.auth.identity.port import IdentityProviderError
from storefront.auth.tokens import issue_access_token
from storefront.config import get_settings
from storefront.favorite.favorite import Favorite
from storefront.favorite.management import AddFavorite, ClearFavorites, RemoveFavorite
from storefront.product.product import Product
from storefront.user.addresses import AddAddress, RemoveAddress, SetDefaultAddress, UpdateAddress
from storefront.user.registration import SignInWithGoogle, UpdateProfile
from storefront.user.user import User

logger = structlog.get_logger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["auth"])
address_router = APIRouter(prefix="/address", tags=["address"])
favorite_router = APIRouter(prefix="/favorites", tags=["favorites"])


def _reload(user) -> User:
    return current_domain.repository_for(User).get(user.id)


async def _sign_in(code: str) -> dict:
    """Exchange an authorization code, upsert the user and issue a token."""
    try:
        profile = await get_identity_provider().exchange(code)
    except IdentityProviderError as exc:
        logger.warning("google_sign_in_failed", reason=str(exc))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Google authentication failed") from exc

    command = SignInWithGoogle(
        google_id=profile.google_id,
        email=profile.email,
        name=profile.name,
        avatar=profile.avatar,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User is inactive")
    return issue_access_token(user)


# --- Auth endpoints ---


@auth_router.get("/google", status_code=307)
async def google_login():
    return RedirectResponse(get_identity_provider().authorization_url(), status_code=307)


@auth_router.get("/google/callback", status_code=307)
async def google_callback(code: str):
    login = await _sign_in(code)
    query = urlencode({"token": login["access_token"]})
    return RedirectResponse(f"{get_settings().frontend_url}/auth/callback?{query}", status_code=307)


@auth_router.post("/google/token", response_model=LoginResponse)
async def google_token(body: GoogleTokenRequest):
    return await _sign_in(body.code)


@auth_router.get("/profile", response_model=ProfileResponse)
async def get_profile(user: User = Depends(authenticated_user)):
    return views.profile_view(user)


@auth_router.patch("/profile", response_model=ProfileResponse)
async def update_profile(body: UpdateProfileRequest, user: User = Depends(authenticated_user)):
    command = UpdateProfile(user_id=str(user.id), name=body.name, nickname=body.nickname, phone=body.phone)
    current_domain.process(command, asynchronous=False)
    return views.profile_view(_reload(user))


# --- Address endpoints ---


@address_router.post("", status_code=201, response_model=AddressResponse)
async def add_address(body: AddAddressRequest, user: User = Depends(authenticated_user)):
    address_id = current_domain.process(AddAddress(user_id=str(user.id), **body.model_dump()), asynchronous=False)
    return views.address_view(_reload(user).address(address_id))


@address_router.get("", response_model=list[AddressResponse])
async def list_addresses(user: User = Depends(authenticated_user)):
    return [views.address_view(a) for a in user.active_addresses]


@address_router.get("/{address_id}", response_model=AddressResponse)
async def get_address(address_id: str, user: User = Depends(authenticated_user)):
    return views.address_view(user.address(address_id))


@address_router.patch("/{address_id}", response_model=AddressResponse)
async def update_address(address_id: str, body: UpdateAddressRequest, user: User = Depends(authenticated_user)):
    command = UpdateAddress(user_id=str(user.id), address_id=address_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return views.address_view(_reload(user).address(address_id))


@address_router.patch("/{address_id}/set-default", response_model=AddressResponse)
async def set_default_address(address_id: str, user: User = Depends(authenticated_user)):
    current_domain.process(SetDefaultAddress(user_id=str(user.id), address_id=address_id), asynchronous=False)
    return views.address_view(_reload(user).address(address_id))


@address_router.delete("/{address_id}", response_model=StatusResponse)
async def remove_address(address_id: str, user: User = Depends(authenticated_user)):
    current_domain.process(RemoveAddress(user_id=str(user.id), address_id=address_id), asynchronous=False)
    return StatusResponse()


# --- Favorite endpoints ---


@favorite_router.post("", status_code=201, response_model=FavoriteResponse)
async def add_favorite(body: AddFavoriteRequest, user: User = Depends(authenticated_user)):
    command = AddFavorite(user_id=str(user.id), product_id=str(body.product_id))
    favorite_id = current_domain.process(command, asynchronous=False)
    favorite = current_domain.repository_for(Favorite).get(favorite_id)
    product = current_domain.repository_for(Product).get(favorite.product_id)
    return views.favorite_view(favorite, product)


@favorite_router.get("", response_model=FavoritesResponse)
async def list_favorites(user: User = Depends(authenticated_user)):
    """Favorites whose product is still on sale, newest first."""
    product_repo = current_domain.repository_for(Product)
    favorites = []
    for favorite in current_domain.repository_for(Favorite).for_user(user.id):
        try:
            product = product_repo.get(favorite.product_id)
        except ObjectNotFoundError:
            continue
        if product.is_active:
            favorites.append(views.favorite_view(favorite, product))
    return {"total": len(favorites), "favorites": favorites}


@favorite_router.delete("", response_model=ClearFavoritesResponse)
async def clear_favorites(user: User = Depends(authenticated_user)):
    count = current_domain.process(ClearFavorites(user_id=str(user.id)), asynchronous=False)
    return {"message": "Favorites cleared", "count": count}


@favorite_router.get("/check/{product_id}", response_model=FavoriteCheckResponse)
async def check_favorite(product_id: str, user: User = Depends(authenticated_user)):
    favorite = current_domain.repository_for(Favorite).find_for(user.id, product_id)
    return {"is_favorite": favorite is not None}


@favorite_router.delete("/{favorite_id}", response_model=StatusResponse)
async def remove_favorite(favorite_id: str, user: User = Depends(authenticated_user)):
    current_domain.process(RemoveFavorite(user_id=str(user.id), favorite_id=favorite_id), asynchronous=False)
    return StatusResponse()
