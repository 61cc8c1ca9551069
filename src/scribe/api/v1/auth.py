from fastapi import APIRouter, Request, status

from src.scribe.api.dependencies import AuthServiceDep, CurrentUser
from src.scribe.core.rate_limit import limiter, signin_rate_limit
from src.scribe.schemas.auth import GitHubSignInRequest, SignInResponse, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/github",
    response_model=SignInResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with GitHub",
    description=(
        "Exchange a GitHub OAuth access token for a Scribe access token. "
        "The GitHub token is stored and used for repository checks and commit fetches."
    ),
    responses={
        200: {"description": "Signed in"},
        401: {"description": "GitHub rejected the token"},
        429: {"description": "Too many sign-in attempts"},
    },
)
@limiter.limit(signin_rate_limit)
async def sign_in_with_github(
    request: Request, data: GitHubSignInRequest, service: AuthServiceDep
) -> SignInResponse:
    user, access_token = await service.sign_in_with_github(data.access_token)
    return SignInResponse(access_token=access_token, user=UserRead.model_validate(user))


@router.get("/me", response_model=UserRead, summary="Current user")
async def me(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)
