"""Localized user-facing messages.

Repositories and the session context never surface raw exception text to
callers; they return one of these strings instead. Templates use ``{one}``
and ``{many}`` for the singular / plural label of the entity involved.

Usage:
    messages = MessageCatalog("ar")
    messages.get("not_found", "clients")   # "لم يتم العثور على العميل"
"""

_LABELS: dict[str, dict[str, tuple[str, str]]] = {
    "ar": {
        "clients": ("العميل", "العملاء"),
        "users": ("المستخدم", "المستخدمين"),
        "agencies": ("الوكالة", "الوكالات"),
        "hotels": ("الفندق", "الفنادق"),
        "flights": ("الرحلة", "الرحلات"),
        "packages": ("الباقة", "الباقات"),
        "services": ("الخدمة", "الخدمات"),
    },
    "en": {
        "clients": ("client", "clients"),
        "users": ("user", "users"),
        "agencies": ("agency", "agencies"),
        "hotels": ("hotel", "hotels"),
        "flights": ("flight", "flights"),
        "packages": ("package", "packages"),
        "services": ("service", "services"),
    },
}

_TEMPLATES: dict[str, dict[str, str]] = {
    "ar": {
        "create_failed": "حدث خطأ أثناء إنشاء {one}. يرجى المحاولة مرة أخرى.",
        "fetch_one_failed": "حدث خطأ أثناء استرجاع بيانات {one}. يرجى المحاولة مرة أخرى.",
        "fetch_many_failed": "حدث خطأ أثناء استرجاع قائمة {many}. يرجى المحاولة مرة أخرى.",
        "fetch_deleted_failed": "حدث خطأ أثناء استرجاع قائمة {many} المحذوفين. يرجى المحاولة مرة أخرى.",
        "search_failed": "حدث خطأ أثناء البحث عن {many}. يرجى المحاولة مرة أخرى.",
        "update_failed": "حدث خطأ أثناء تحديث بيانات {one}. يرجى المحاولة مرة أخرى.",
        "delete_failed": "حدث خطأ أثناء حذف {one}. يرجى المحاولة مرة أخرى.",
        "restore_failed": "حدث خطأ أثناء استعادة {one}. يرجى المحاولة مرة أخرى.",
        "not_found": "لم يتم العثور على {one}",
        "permission_create": "لا تملك الصلاحية لإنشاء مستخدم بهذه الرتبة.",
        "permission_update": "لا تملك الصلاحية لتعديل هذا المستخدم.",
        "permission_delete": "لا تملك الصلاحية لحذف هذا المستخدم.",
        "login_failed": "البريد الإلكتروني أو كلمة المرور غير صحيحة.",
        "logout_failed": "حدث خطأ أثناء تسجيل الخروج.",
        "session_save_failed": "تعذر حفظ الجلسة. يرجى المحاولة مرة أخرى.",
        "wrong_password": "كلمة المرور غير صحيحة",
        "too_many_requests": "تم تجاوز عدد المحاولات المسموح به. يرجى المحاولة لاحقًا",
        "reauth_failed": "فشل في التحقق من كلمة المرور",
        "no_session": "لم يتم العثور على المستخدم",
        "delete_account_failed": "حدث خطأ أثناء حذف الحساب. يرجى المحاولة مرة أخرى",
        "image_upload_failed": "حدث خطأ أثناء رفع الصورة. يرجى المحاولة مرة أخرى.",
        "image_remove_failed": "حدث خطأ أثناء حذف الصورة. يرجى المحاولة مرة أخرى.",
    },
    "en": {
        "create_failed": "An error occurred while creating the {one}. Please try again.",
        "fetch_one_failed": "An error occurred while loading the {one}. Please try again.",
        "fetch_many_failed": "An error occurred while loading the {many} list. Please try again.",
        "fetch_deleted_failed": "An error occurred while loading deleted {many}. Please try again.",
        "search_failed": "An error occurred while searching {many}. Please try again.",
        "update_failed": "An error occurred while updating the {one}. Please try again.",
        "delete_failed": "An error occurred while deleting the {one}. Please try again.",
        "restore_failed": "An error occurred while restoring the {one}. Please try again.",
        "not_found": "The {one} was not found",
        "permission_create": "You are not allowed to create a user with this role.",
        "permission_update": "You are not allowed to modify this user.",
        "permission_delete": "You are not allowed to delete this user.",
        "login_failed": "Incorrect email or password.",
        "logout_failed": "An error occurred while signing out.",
        "session_save_failed": "The session could not be saved. Please try again.",
        "wrong_password": "Incorrect password",
        "too_many_requests": "Too many attempts. Please try again later",
        "reauth_failed": "Password verification failed",
        "no_session": "User not found",
        "delete_account_failed": "An error occurred while deleting the account. Please try again",
        "image_upload_failed": "An error occurred while uploading the image. Please try again.",
        "image_remove_failed": "An error occurred while removing the image. Please try again.",
    },
}


class MessageCatalog:
    """Resolves message keys to localized strings for one locale."""

    def __init__(self, locale: str = "ar"):
        if locale not in _TEMPLATES:
            raise ValueError(f"Unsupported locale: {locale}")
        self.locale = locale

    def get(self, key: str, collection: str | None = None) -> str:
        template = _TEMPLATES[self.locale][key]
        if collection is None:
            return template
        one, many = _LABELS[self.locale].get(collection, (collection, collection))
        return template.format(one=one, many=many)
