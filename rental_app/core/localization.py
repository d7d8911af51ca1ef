from enum import Enum

from fastapi import Header


class Language(str, Enum):
    EN = "en"
    RW = "rw"


TRANSLATIONS = {
    Language.EN: {
        "user.registered": "User registered successfully",
        "user.retrieved": "User retrieved successfully",
        "user.list": "Users retrieved",
        "user.pending": "Pending users retrieved",
        "user.verified": "User verified successfully",
        "property.created": "Property created successfully",
        "property.retrieved": "Property retrieved successfully",
        "property.list": "Properties retrieved",
        "property.pending": "Pending properties retrieved",
        "property.updated": "Property updated successfully",
        "property.verified": "Property verified successfully",
        "request.created": "Request created successfully",
        "request.retrieved": "Request retrieved successfully",
        "request.list": "Requests retrieved",
        "request.connected": "Request connected successfully",
        "request.completed": "Request completed successfully",
        "commission.created": "Commission recorded successfully",
        "commission.retrieved": "Commission retrieved successfully",
        "commission.list": "Commissions retrieved",
        "admin.stats": "Statistics retrieved successfully",
        "auth.login.success": "Login successful",
        "auth.login.failed": "Invalid credentials",
        "auth.unauthorized": "Unauthorized access",
        "auth.forbidden": "Forbidden: Insufficient permissions",
        "validation.failed": "Validation failed",
        "not.found": "Resource not found",
        "route.not.found": "Route not found",
        "server.error": "Internal server error",
    },
    Language.RW: {
        "user.registered": "Umukoresha wiyandikishije neza",
        "user.retrieved": "Umukoresha wabonetse neza",
        "user.list": "Abakoresha babonetse",
        "user.pending": "Abakoresha bategereje kwemezwa babonetse",
        "user.verified": "Umukoresha wemejwe neza",
        "property.created": "Inzu yashyizweho neza",
        "property.retrieved": "Inzu yabonetse neza",
        "property.list": "Amazu yabonetse",
        "property.pending": "Amazu ategereje kwemezwa yabonetse",
        "property.updated": "Inzu yahinduwe neza",
        "property.verified": "Inzu yemejwe neza",
        "request.created": "Gusaba kwashyizweho neza",
        "request.retrieved": "Gusaba kwabonetse neza",
        "request.list": "Ubusabe bwabonetse",
        "request.connected": "Gusaba kwiyunze neza",
        "request.completed": "Gusaba gwarangiye neza",
        "commission.created": "Komisiyo yanditswe neza",
        "commission.retrieved": "Komisiyo yabonetse neza",
        "commission.list": "Komisiyo zabonetse",
        "admin.stats": "Imibare yabonetse neza",
        "auth.login.success": "Kwinjira byagenze neza",
        "auth.login.failed": "Amakuru atari ukuri",
        "auth.unauthorized": "Ntugomba kwinjira",
        "auth.forbidden": "Ntugomba kugira uburenganzira",
        "validation.failed": "Gukemura byanze",
        "not.found": "Ntibyabonetse",
        "route.not.found": "Inzira ntiyabonetse",
        "server.error": "Ikosa mu seriveri",
    },
}


def translate(key: str, lang: Language = Language.EN) -> str:
    return TRANSLATIONS.get(lang, {}).get(key, key)


def language_from_header(accept_language: str | None) -> Language:
    if not accept_language:
        return Language.EN
    return Language.RW if "rw" in accept_language.lower() else Language.EN


async def get_language(
    accept_language: str | None = Header(default=None, alias="Accept-Language"),
) -> Language:
    return language_from_header(accept_language)
