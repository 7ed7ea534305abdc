"""AdmissionReview envelope schemas (admission.k8s.io/v1)."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

ADMISSION_API_VERSION = "admission.k8s.io/v1"
ADMISSION_KIND = "AdmissionReview"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GroupVersionKind(_CamelModel):
    group: str = ""
    version: str = ""
    kind: str = ""


class GroupVersionResource(_CamelModel):
    group: str = ""
    version: str = ""
    resource: str = ""


class UserInfo(_CamelModel):
    """Authenticated identity as seen by the API server."""
    username: str = ""
    uid: str = ""
    groups: List[str] = Field(default_factory=list)
    extra: Dict[str, List[str]] = Field(default_factory=dict)


class AdmissionRequest(_CamelModel):
    uid: str
    kind: GroupVersionKind = Field(default_factory=GroupVersionKind)
    resource: Optional[GroupVersionResource] = None
    sub_resource: Optional[str] = Field(None, alias="subResource")
    name: Optional[str] = None
    namespace: Optional[str] = None
    operation: str = ""
    user_info: UserInfo = Field(default_factory=UserInfo, alias="userInfo")
    object: Optional[Dict[str, Any]] = None
    old_object: Optional[Dict[str, Any]] = Field(None, alias="oldObject")
    dry_run: Optional[bool] = Field(None, alias="dryRun")
    options: Optional[Dict[str, Any]] = None


class StatusResult(_CamelModel):
    """Subset of metav1.Status carried in a denial."""
    status: Optional[str] = None
    message: Optional[str] = None
    reason: Optional[str] = None
    code: Optional[int] = None


class AdmissionResponse(_CamelModel):
    uid: str
    allowed: bool
    status: Optional[StatusResult] = None
    warnings: Optional[List[str]] = None


class AdmissionReview(_CamelModel):
    api_version: str = Field(ADMISSION_API_VERSION, alias="apiVersion")
    kind: str = ADMISSION_KIND
    request: Optional[AdmissionRequest] = None
    response: Optional[AdmissionResponse] = None
