"""REST projection — derived fields on user and content representations."""

from portfolio_cms.rest.api import ContentAPI
from portfolio_cms.rest.fields import RestField, RestFieldRegistry
from portfolio_cms.rest.projection import (
    AUTHOR_NAME_FIELD,
    AUTHOR_PROFILE_FIELD,
    FEATURED_IMAGE_URL_FIELD,
    USER_OBJECT_TYPE,
    ProjectionLayer,
    RequestContext,
)

__all__ = [
    "AUTHOR_NAME_FIELD",
    "AUTHOR_PROFILE_FIELD",
    "FEATURED_IMAGE_URL_FIELD",
    "USER_OBJECT_TYPE",
    "ContentAPI",
    "ProjectionLayer",
    "RequestContext",
    "RestField",
    "RestFieldRegistry",
]
