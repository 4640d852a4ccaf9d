"""
Customer Validation - contact fields required before checkout.
"""
import re

from ..engine.models import CustomerInfo, DeliveryMethod

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def validate_customer(info: CustomerInfo, delivery_method=DeliveryMethod.PICKUP) -> dict[str, str]:
    """
    Check the contact record for the chosen delivery method.

    Returns a {field: message} dict; empty means the record is complete.
    Address fields are only required for home delivery.
    """
    errors = {}
    if not info.first_name.strip():
        errors['first_name'] = "First name is required"
    if not info.last_name.strip():
        errors['last_name'] = "Last name is required"
    if not info.phone.strip():
        errors['phone'] = "Phone number is required"
    if not info.email.strip():
        errors['email'] = "Email is required"
    elif not EMAIL_RE.match(info.email):
        errors['email'] = "Enter a valid email address"

    if DeliveryMethod(delivery_method) == DeliveryMethod.DELIVERY:
        if not (info.address or '').strip():
            errors['address'] = "Street address is required"
        if not (info.city or '').strip():
            errors['city'] = "City is required"
        if not (info.postal_code or '').strip():
            errors['postal_code'] = "Postal code is required"

    return errors
