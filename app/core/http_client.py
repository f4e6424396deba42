"""
aiohttp session factory for outbound REST calls (Supabase Auth, TMAP).
"""
import aiohttp


def create_http_session(timeout_seconds: float = 30) -> aiohttp.ClientSession:
    """Create the process-wide aiohttp session (TCP connection pooling)."""
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=timeout_seconds)
    )


async def close_http_session(session: aiohttp.ClientSession) -> None:
    """세션 종료 (앱 종료 시 호출)"""
    if session and not session.closed:
        await session.close()
