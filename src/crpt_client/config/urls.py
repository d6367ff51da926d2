from __future__ import annotations

DEFAULT_API_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"

JSON_MEDIA_TYPE = "application/json"
