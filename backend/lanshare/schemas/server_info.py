"""Server info schema."""
from lanshare.schemas.base import CamelModel


class ServerInfo(CamelModel):
    url: str
    qr_code_url: str
