# 공용 의존성 (Bearer 토큰 → 현재 사용자)
import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recipegen.core.security import decode_token
from recipegen.db.init import get_db
from recipegen.services.users import get_user

log = logging.getLogger(__name__)

# auto_error=False: 토큰 없음도 403이 아니라 401로 통일
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db=Depends(get_db),
) -> Dict[str, Any]:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    try:
        payload = decode_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        log.info("rejected token: %s", e)
        raise HTTPException(status_code=401, detail="Not authorized, token failed")

    user = await get_user(db, str(payload["id"]))
    if not user:
        raise HTTPException(status_code=401, detail="Not authorized, user not found")

    return {"id": str(user["_id"]), "name": user.get("name", ""), "email": user.get("email", "")}
