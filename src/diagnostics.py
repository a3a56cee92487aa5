"""Live checks of the projected fields against the configured stores.

Each check exercises registration or a read/write path end to end and
reports pass, fail or skip. Checks that write profile values restore the
previous values when they finish.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator
from enum import StrEnum

from pydantic import BaseModel, Field

from portfolio_cms.bootstrap import CmsService
from portfolio_cms.content.models import ContentStatus
from portfolio_cms.errors import CmsError
from portfolio_cms.profiles.fields import PROFILE_FIELD_NAMES, get_profile_field, owner_key
from portfolio_cms.profiles.store import ProfileFieldStore
from portfolio_cms.rest.projection import AUTHOR_PROFILE_FIELD, USER_OBJECT_TYPE
from portfolio_cms.schema.definitions import ARTICLE, PROJECT

logger = logging.getLogger(__name__)

ADMIN_ROLE = "administrator"


class CheckStatus(StrEnum):
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class CheckResult(BaseModel):
    """Outcome of one diagnostic check."""

    name: str
    status: CheckStatus
    details: list[str] = Field(default_factory=list)


class DiagnosticsReport(BaseModel):
    results: list[CheckResult] = Field(default_factory=list)

    def _count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def passed(self) -> int:
        return self._count(CheckStatus.PASS)

    @property
    def failed(self) -> int:
        return self._count(CheckStatus.FAIL)

    @property
    def skipped(self) -> int:
        return self._count(CheckStatus.SKIP)

    @property
    def success(self) -> bool:
        return self.failed == 0 and self.passed > 0


@contextlib.contextmanager
def preserved_fields(profiles: ProfileFieldStore, owner: str, names: list[str]) -> Iterator[None]:
    """Restore the given fields of an owner to their current values on exit."""
    storage_keys = [get_profile_field(n).storage_key for n in names]
    snapshot = profiles.get_many(owner, storage_keys)
    try:
        yield
    finally:
        for key, value in snapshot.items():
            if value is None:
                profiles.delete(key, owner)
            else:
                profiles.set(key, owner, value)


def check_user_fields_registered(service: CmsService) -> CheckResult:
    name = "User REST fields registration"
    registered = service.fields.names_for(USER_OBJECT_TYPE)
    missing = [f for f in PROFILE_FIELD_NAMES if f not in registered]
    if missing:
        return CheckResult(
            name=name,
            status=CheckStatus.FAIL,
            details=[f"Missing: {', '.join(missing)}"],
        )
    return CheckResult(
        name=name,
        status=CheckStatus.PASS,
        details=[f"All {len(PROFILE_FIELD_NAMES)} user fields are registered"],
    )


def check_item_author_profile_registered(service: CmsService) -> CheckResult:
    name = "Content author_profile registration"
    details = []
    status = CheckStatus.PASS
    for type_key in (ARTICLE.key, PROJECT.key):
        if service.fields.get(type_key, AUTHOR_PROFILE_FIELD) is None:
            status = CheckStatus.FAIL
            details.append(f"author_profile not registered for {type_key}")
        else:
            details.append(f"author_profile registered for {type_key}")
    return CheckResult(name=name, status=status, details=details)


def check_user_field_round_trip(service: CmsService) -> CheckResult:
    name = "User field set/get"
    admins = service.content.users(role=ADMIN_ROLE)
    if not admins:
        return CheckResult(name=name, status=CheckStatus.SKIP, details=["No administrator found"])

    user = admins[0]
    owner = owner_key(user.id)
    field = get_profile_field("linkedin_url")
    expected = "https://linkedin.com/in/testuser"
    with preserved_fields(service.profiles, owner, [field.name]):
        if not service.profiles.set(field.storage_key, owner, expected):
            return CheckResult(name=name, status=CheckStatus.FAIL, details=["Write failed"])
        got = service.profiles.get(field.storage_key, owner)

    if got != expected:
        return CheckResult(
            name=name,
            status=CheckStatus.FAIL,
            details=[f"Expected: {expected}", f"Got: {got!r}"],
        )
    return CheckResult(
        name=name,
        status=CheckStatus.PASS,
        details=[f"User {user.id} ({user.login})", f"Set and got: {got}"],
    )


def check_user_representation(service: CmsService) -> CheckResult:
    name = "User representation"
    admins = service.content.users(role=ADMIN_ROLE)
    if not admins:
        return CheckResult(name=name, status=CheckStatus.SKIP, details=["No administrator found"])

    user = admins[0]
    values = {
        "linkedin_url": "https://linkedin.com/in/testuser",
        "twitter_url": "https://twitter.com/testuser",
    }
    with preserved_fields(service.profiles, owner_key(user.id), list(values)):
        service.api.update_user(user.id, dict(values))
        data = service.api.get_user(user.id)

    missing = [k for k, v in values.items() if data.get(k) != v]
    if missing:
        return CheckResult(
            name=name,
            status=CheckStatus.FAIL,
            details=[f"Missing: {m}" for m in missing],
        )
    return CheckResult(
        name=name,
        status=CheckStatus.PASS,
        details=[f"{k}: {data[k]}" for k in values],
    )


def check_item_author_profile(service: CmsService) -> CheckResult:
    name = "Article author_profile"
    articles = service.content.list(post_type=ARTICLE.key, status=ContentStatus.PUBLISHED)
    if not articles:
        return CheckResult(
            name=name,
            status=CheckStatus.SKIP,
            details=["No published articles found; create one first"],
        )
    article = articles[0]
    if article.author_id is None:
        return CheckResult(
            name=name,
            status=CheckStatus.SKIP,
            details=[f"Article {article.id} has no author"],
        )

    owner = owner_key(article.author_id)
    values = {
        "linkedin_url": "https://linkedin.com/in/author",
        "author_cta_hook": "Follow me for more content!",
    }
    with preserved_fields(service.profiles, owner, list(values)):
        for field_name, value in values.items():
            service.profiles.set(get_profile_field(field_name).storage_key, owner, value)
        data = service.api.get_item(ARTICLE.rest_base, article.id)

    profile = data.get(AUTHOR_PROFILE_FIELD)
    if not isinstance(profile, dict):
        return CheckResult(
            name=name,
            status=CheckStatus.FAIL,
            details=[f"Available fields: {', '.join(data)}"],
        )
    wrong = [k for k, v in values.items() if profile.get(k) != v]
    if wrong:
        return CheckResult(
            name=name,
            status=CheckStatus.FAIL,
            details=[f"{k}: {profile.get(k)!r}" for k in wrong],
        )
    return CheckResult(
        name=name,
        status=CheckStatus.PASS,
        details=[f"Article {article.id}, author {article.author_id}"]
        + [f"{k}: {profile[k]}" for k in values],
    )


CHECKS: tuple[Callable[[CmsService], CheckResult], ...] = (
    check_user_fields_registered,
    check_item_author_profile_registered,
    check_user_field_round_trip,
    check_user_representation,
    check_item_author_profile,
)


def run_diagnostics(service: CmsService) -> DiagnosticsReport:
    """Run every check, turning CmsError into a failed result."""
    report = DiagnosticsReport()
    for check in CHECKS:
        try:
            result = check(service)
        except CmsError as exc:
            logger.warning("Check %s raised %s", check.__name__, exc)
            result = CheckResult(name=check.__name__, status=CheckStatus.FAIL, details=[str(exc)])
        report.results.append(result)
    return report
