"""
User-facing messages for denial reasons
"""
from typing import Optional

from schoolapp.rbac.models import DenialReason

DEFAULT_LOCALE = 'en'

DENIAL_MESSAGES = {
    'en': {
        DenialReason.SUBJECT_INACTIVE: "This account has been deactivated.",
        DenialReason.PERMISSION_NOT_GRANTED_TO_ROLE: "Your role does not have this permission.",
        DenialReason.NOT_OWN_SUBJECT: "You can only manage grades for subjects you teach.",
        DenialReason.NOT_OWN_CLASS: "You can only access classes you are responsible for.",
        DenialReason.NOT_OWN_STUDENT: "You can only counsel students you teach.",
    },
    'ko': {
        DenialReason.SUBJECT_INACTIVE: "비활성화된 사용자입니다.",
        DenialReason.PERMISSION_NOT_GRANTED_TO_ROLE: "해당 역할에 권한이 없습니다.",
        DenialReason.NOT_OWN_SUBJECT: "담당 과목의 성적만 관리할 수 있습니다.",
        DenialReason.NOT_OWN_CLASS: "담당 반만 접근할 수 있습니다.",
        DenialReason.NOT_OWN_STUDENT: "담당 학생만 상담할 수 있습니다.",
    },
}


def describe_denial(reason: Optional[DenialReason], locale: str = DEFAULT_LOCALE) -> Optional[str]:
    """
    Get the message shown to a user for a denial reason.

    Unknown locales fall back to English. Returns None when there is no
    reason, i.e. the request was allowed.
    """
    if reason is None:
        return None
    messages = DENIAL_MESSAGES.get(locale, DENIAL_MESSAGES[DEFAULT_LOCALE])
    return messages[DenialReason(reason)]
