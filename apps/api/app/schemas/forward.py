from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List

from app.utils.values import is_blank

class ForwardRequest(BaseModel):
    """
    Fields are presence-checked only: anything but null, false, 0 or ""
    passes and is forwarded as-is. Only the wire names are read, so
    `api_key` does not stand in for `apiKey`. Unknown keys are dropped.
    """
    model_config = ConfigDict(extra="ignore")

    username: Any = None
    api_key: Any = Field(default=None, alias="apiKey")

    @classmethod
    def required_fields(cls) -> List[str]:
        return [f.alias or name for name, f in cls.model_fields.items()]

    def missing_fields(self) -> List[str]:
        return [
            f.alias or name
            for name, f in type(self).model_fields.items()
            if is_blank(getattr(self, name))
        ]

    def to_upstream(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

class AskRequest(ForwardRequest):
    question: Any = None

class NotesRequest(ForwardRequest):
    # opaque: string, object or array, passed through untouched
    notes: Any = None
