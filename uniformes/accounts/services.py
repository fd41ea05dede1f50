"""
Customer/company collaborators for tier pricing.

Builds the explicit `SessionPrincipal` from the authenticated request and
provides the ORM-backed company and company-type lookups consumed by
`storefront.services.pricing`.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth.models import User
from django.db import transaction

from storefront.services.pricing import (
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    CompanyRef,
    CompanyTypeRef,
    SessionPrincipal,
)

from .models import Company, CompanyType, CustomerProfile

logger = logging.getLogger(__name__)


def get_profile(user) -> Optional[CustomerProfile]:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return getattr(user, "customer_profile", None)


def is_admin_user(user) -> bool:
    """Django staff or a profile with the admin role."""
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    if user.is_staff or user.is_superuser:
        return True
    profile = get_profile(user)
    return bool(profile and profile.is_admin)


def principal_from_user(user) -> Optional[SessionPrincipal]:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    profile = get_profile(user)
    role = ROLE_ADMIN if is_admin_user(user) else ROLE_CUSTOMER
    return SessionPrincipal(
        id=user.pk,
        role=role,
        company_id=profile.company_id if profile else None,
    )


def principal_from_request(request) -> Optional[SessionPrincipal]:
    """Session principal of ``request`` or ``None`` for anonymous callers."""
    return principal_from_user(getattr(request, "user", None))


def company_lookup(company_id: int) -> Optional[CompanyRef]:
    row = (
        Company.objects.filter(pk=company_id)
        .values("id", "name", "company_type_id")
        .first()
    )
    if row is None:
        return None
    return CompanyRef(id=row["id"], name=row["name"], company_type_id=row["company_type_id"])


def company_type_lookup(company_type_id: int) -> Optional[CompanyTypeRef]:
    row = (
        CompanyType.objects.filter(pk=company_type_id)
        .values("id", "name", "discount_percentage")
        .first()
    )
    if row is None:
        return None
    return CompanyTypeRef(
        id=row["id"],
        name=row["name"],
        discount_percentage=row["discount_percentage"],
    )


def assign_customer_company(profile: CustomerProfile, company: Optional[Company]) -> CustomerProfile:
    """Attach ``profile`` to ``company``; ``None`` detaches it."""
    previous = profile.company_id
    profile.company = company
    profile.save(update_fields=["company"])
    logger.info(
        "Customer %s company changed: %s -> %s",
        profile.user_id,
        previous,
        company.pk if company else None,
    )
    return profile


def _unique_username(email: str) -> str:
    base = (email.split("@")[0] or "cliente")[:140]
    candidate = base
    index = 2
    while User.objects.filter(username=candidate).exists():
        candidate = f"{base}{index}"
        index += 1
    return candidate


@transaction.atomic
def register_customer(
    *,
    email: str,
    first_name: str,
    last_name: str,
    password: Optional[str] = None,
    username: Optional[str] = None,
    phone: str = "",
    address: str = "",
    city: str = "",
    state: str = "",
    zip_code: str = "",
    company_name: str = "",
    company: Optional[Company] = None,
) -> User:
    """
    Create a customer account with its profile.

    Without a password the account cannot log in until one is set by an
    admin (guest customers created from quote requests).
    """
    user = User(
        username=username or _unique_username(email),
        email=email,
        first_name=first_name,
        last_name=last_name,
    )
    if password:
        user.set_password(password)
    else:
        user.set_unusable_password()
    user.save()

    profile = user.customer_profile
    profile.role = CustomerProfile.ROLE_CUSTOMER
    profile.phone = phone
    profile.address = address
    profile.city = city
    profile.state = state
    profile.zip_code = zip_code
    profile.company_name = company_name
    profile.company = company
    profile.save()
    logger.info("Customer registered: user=%s email=%s", user.pk, email)
    return user
