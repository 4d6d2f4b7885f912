"""
Pydantic models for sfdx auth records and command output.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthFile(BaseModel):
    """An sfdx auth record as stored in ~/.sfdx/<username>.json."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    username: str
    instance_url: str = Field(alias='instanceUrl')
    client_id: Optional[str] = Field(default=None, alias='clientId')
    private_key: Optional[str] = Field(default=None, alias='privateKey')
    refresh_token: Optional[str] = Field(default=None, alias='refreshToken')


class OrgDisplayDetails(BaseModel):
    """The result body of `sfdx force:org:display --json`."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    sfdx_auth_url: Optional[str] = Field(default=None, alias='sfdxAuthUrl')


class OrgDisplayResult(BaseModel):
    """Wrapper produced by `sfdx force:org:display --verbose --json`."""
    model_config = ConfigDict(extra='ignore')

    result: OrgDisplayDetails
