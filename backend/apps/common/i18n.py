from __future__ import annotations

from typing import Any, Iterable, Optional

from django.conf import settings
from django.utils import translation

_DEFAULT_LANGUAGE = (
    (getattr(settings, "LANGUAGE_CODE", "ar") or "ar").split("-")[0].lower()
)
_SUPPORTED_LANGUAGES = {
    (code or "ar").split("-")[0].lower()
    for code, _ in getattr(settings, "LANGUAGES", [("ar", "Arabic")])
} or {_DEFAULT_LANGUAGE}


def normalize_language_code(language_code: Optional[str]) -> str:
    """
    Lower-case a language code and drop its region. Unsupported languages
    fall back to the project default.
    """

    if not language_code:
        language_code = translation.get_language()
    if not language_code:
        return _DEFAULT_LANGUAGE
    normalized = language_code.split("-")[0].lower()
    return normalized if normalized in _SUPPORTED_LANGUAGES else _DEFAULT_LANGUAGE


def resolve_language(request=None, fallback: Optional[str] = None) -> str:
    """
    Pick the language for a request: ``?lang=`` first, then whatever
    LocaleMiddleware negotiated, then the active translation.
    """

    language_code = None
    if request is not None:
        query = getattr(request, "GET", None)
        if query:
            language_code = query.get("lang") or query.get("language")
        if not language_code:
            language_code = getattr(request, "LANGUAGE_CODE", None)
    language_code = language_code or translation.get_language() or fallback
    return normalize_language_code(language_code)


def localized(obj: Any, field: str, language: Optional[str] = None) -> Optional[str]:
    """
    Read ``<field>_<lang>`` from ``obj`` falling back to the default language
    and then to any non-empty translation.
    """

    language = normalize_language_code(language)
    candidates = [language, _DEFAULT_LANGUAGE, *sorted(_SUPPORTED_LANGUAGES)]
    for code in candidates:
        value = getattr(obj, f"{field}_{code}", None)
        if value:
            return value
    return None


def iter_supported_languages() -> Iterable[str]:
    return sorted(_SUPPORTED_LANGUAGES)


def get_default_language() -> str:
    return _DEFAULT_LANGUAGE


class Messages:
    """User-facing API messages. The storefront audience reads Arabic."""

    GENERIC_RETRY = "حدث خطأ، حاول مرة أخرى"
    SERVER_ERROR = "حدث خطأ غير متوقع"
    VALIDATION_FAILED = "البيانات المدخلة غير صحيحة"
    AUTH_REQUIRED = "يجب تسجيل الدخول أولاً"
    AUTH_FAILED = "بيانات الدخول غير صحيحة"
    FORBIDDEN = "ليس لديك صلاحية لتنفيذ هذا الإجراء"
    NOT_FOUND = "العنصر غير موجود"
    METHOD_NOT_ALLOWED = "الطريقة غير مسموحة"
    THROTTLED = "طلبات كثيرة، حاول لاحقاً"

    TEMPLATE_NOT_FOUND = "القالب غير موجود"
    TEMPLATE_UNAVAILABLE = "المنتج غير متاح"

    COUPON_VALID = "كود الخصم صالح"
    COUPON_NOT_FOUND = "كود الخصم غير صالح"
    COUPON_INACTIVE = "كود الخصم غير نشط"
    COUPON_NOT_STARTED = "كود الخصم لم يبدأ بعد"
    COUPON_EXPIRED = "كود الخصم منتهي الصلاحية"
    COUPON_EXHAUSTED = "كود الخصم استنفد الحد الأقصى للاستخدام"
    COUPON_USER_LIMIT = "لقد استخدمت هذا الكود الحد الأقصى المسموح"
    COUPON_MIN_ORDER = "الحد الأدنى للطلب {amount} {currency}"
    COUPON_PERCENT_TOO_HIGH = "نسبة الخصم لا يمكن أن تتجاوز 100%"
    COUPON_CREATED = "تم إنشاء كود الخصم بنجاح"
    COUPON_UPDATED = "تم تحديث كود الخصم بنجاح"
    COUPON_DELETED = "تم حذف كود الخصم بنجاح"
    COUPON_CODE_TAKEN = "كود الخصم مستخدم مسبقاً"

    WISHLIST_ADDED = "تمت إضافة المنتج للمفضلة"
    WISHLIST_REMOVED = "تمت إزالة المنتج من المفضلة"
    WISHLIST_MISSING = "المنتج غير موجود في المفضلة"
    WISHLIST_CLEARED = "تم حذف {count} منتج من المفضلة"

    ORDER_CREATED = "تم إنشاء الطلب بنجاح"
    ORDER_NOT_FOUND = "الطلب غير موجود"
    ORDER_ITEMS_REQUIRED = "يجب إضافة منتج واحد على الأقل"
    ORDER_NOT_PENDING = "لا يمكن دفع هذا الطلب"
    ORDER_PAID = "تم الدفع بنجاح"


__all__ = [
    "normalize_language_code",
    "resolve_language",
    "localized",
    "iter_supported_languages",
    "get_default_language",
    "Messages",
]
