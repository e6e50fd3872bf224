from fastapi import HTTPException, status, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from core.config import settings
from core.security import decode_subject

# Tokens are issued by the identity provider; this service only verifies them.
# tokenUrl is only advertised in the OpenAPI docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=settings.AUTH_TOKEN_URL)

async def get_current_owner(token: str = Depends(oauth2_scheme)) -> str:
    """Resolves the bearer token to the owner id every habit query is scoped by."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        owner_id = decode_subject(token)
        if owner_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    return owner_id
