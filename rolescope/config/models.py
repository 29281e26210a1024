from pydantic import BaseModel
from typing import Literal


class RoleScopeConfig(BaseModel):
    report_cycles: bool = True
    strict_identifiers: bool = True
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
