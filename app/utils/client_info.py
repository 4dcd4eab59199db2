from typing import Optional
from fastapi import Request


class ClientInfoUtils:
    """Client identification behind reverse proxies."""

    PROXY_HEADERS = (
        "X-Real-IP",
        "X-Forwarded-For",
        "CF-Connecting-IP",
        "X-Client-IP",
        "True-Client-IP",
    )

    def get_client_ip(self, request: Request) -> Optional[str]:
        for header in self.PROXY_HEADERS:
            ip = request.headers.get(header)
            if ip and ip.lower() != "unknown":
                return ip.split(",")[0].strip()

        return request.client.host if request.client else None

    def get_user_agent(self, request: Request) -> str:
        return request.headers.get("User-Agent", "")


client_info_utils = ClientInfoUtils()
