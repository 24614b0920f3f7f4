"""
OCR provider descriptors.

Provider configuration is an injected value (ordered list of descriptors with
credentials and quota counters), passed to the acquisition chain per call.
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel, Field

ProviderType = Literal['mathpix', 'tencent', 'baidu', 'aliyun', 'xfyun', 'custom']

_DATA_URL_PREFIX = re.compile(r'^data:image/[a-zA-Z0-9.+-]+;base64,')


class ProviderConfig(BaseModel):
    """One configured recognition provider"""
    id: str = Field(..., description="Stable provider id")
    name: str = Field(..., description="Display name")
    type: ProviderType = Field(default="custom", description="Provider kind")
    api_key: str = Field(default="", description="API key / bearer token")
    secret_key: Optional[str] = Field(default=None, description="Secret key")
    app_id: Optional[str] = Field(default=None, description="App id for providers that need one")
    endpoint: Optional[str] = Field(default=None, description="HTTP endpoint (custom providers)")
    enabled: bool = True
    priority: int = Field(default=1, description="Lower runs first")
    monthly_quota: Optional[int] = Field(default=None, description="Calls allowed per month; 0/None = unlimited")
    used_this_month: int = 0
    description: Optional[str] = None

    def quota_exhausted(self) -> bool:
        return bool(self.monthly_quota) and self.used_this_month >= self.monthly_quota


def strip_data_url(image_b64: str) -> str:
    """Remove a ``data:image/...;base64,`` prefix if present."""
    return _DATA_URL_PREFIX.sub('', (image_b64 or '').strip())
