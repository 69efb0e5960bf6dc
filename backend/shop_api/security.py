"""
ShopAPI Backend — Password Hashing
====================================

bcrypt through passlib's CryptContext. Hashing is CPU-bound (~50ms at 10
rounds), so hash_password runs it in Starlette's threadpool to keep the
event loop free.
"""

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from shop_api.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


async def hash_password(password: str) -> str:
    return await run_in_threadpool(pwd_context.hash, password)
