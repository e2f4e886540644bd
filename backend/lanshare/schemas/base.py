"""camelCase JSON for everything that leaves the server.

Two kinds of payload go out: query responses (`/files`, `/upload`,
`/server-info`) and live events on `/ws`. Field names stay snake_case in
Python; the alias generator turns `qr_code_url` into `qrCodeUrl` on the wire.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Payloads built field by field (server info, upload ack, live event envelope)."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class CamelORMModel(CamelModel):
    """Payloads copied off a domain object's attributes, e.g. `FileInfo.model_validate(record)`."""
    model_config = {
        **CamelModel.model_config,
        "from_attributes": True,
    }
