"""
Domain Constants: Guardian Eye 전역 상수.

판정 값, sentinel 메시지, 페이지/내비게이션 정의 등
시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Verdict (판정 값)
# =============================================================================
# URL 분석 결과 status 허용값.
# error는 모델이 아니라 flow 경계에서 채워지는 sentinel 상태.

STATUS_SAFE = "safe"
STATUS_UNSAFE = "unsafe"
STATUS_SUSPICIOUS = "suspicious"
STATUS_ERROR = "error"

# threats[] 허용값
THREAT_MALWARE = "malware"
THREAT_PHISHING = "phishing"
THREAT_SPAM = "spam"
THREAT_NONE = "none"

URL_THREATS = (THREAT_MALWARE, THREAT_PHISHING, THREAT_SPAM, THREAT_NONE)

# =============================================================================
# Sentinel Results (실패 시 고정 결과)
# =============================================================================
# URL flow는 예외를 던지지 않고 아래 메시지를 가진 error 결과를 반환한다.

SENTINEL_CONFIDENCE = "0%"
SENTINEL_DETAILS_UNAVAILABLE = "Unable to analyze due to server or scanning issue."
SENTINEL_DETAILS_PARSE_FAILED = "Failed to parse the analysis result."

# =============================================================================
# Action Error Messages (UI 배너용 일반 메시지)
# =============================================================================

ACTION_URL_FAILED_MESSAGE = "Failed to analyze URL due to a server-side error."
ACTION_APK_FAILED_MESSAGE = "Failed to analyze APK metadata due to a server-side error."

# =============================================================================
# Input Validation Messages (폼 검증)
# =============================================================================

URL_MIN_LENGTH = 5
APK_SOURCE_MIN_LENGTH = 5

MSG_URL_REQUIRED = "Please enter a URL."
MSG_URL_INVALID = "Please enter a valid URL."
MSG_APK_SOURCE_INVALID = "Please provide a valid source (e.g., URL or app store name)."

# =============================================================================
# Flow Names
# =============================================================================

FLOW_ANALYZE_URL = "analyzeUrlForPhishingFlow"
FLOW_ANALYZE_APK_METADATA = "analyzeApkMetadataForMaliceFlow"
FLOW_ANALYZE_APK_SOURCE = "analyzeApkSourceForMaliceFlow"

# =============================================================================
# Navigation (사이드바 / 헤더)
# =============================================================================

APP_NAME = "Guardian Eye"

# (href, icon, label)
NAV_ITEMS = (
    ("/dashboard", "layout-grid", "Dashboard"),
    ("/url-scanner", "link", "URL Scanner"),
    ("/apk-scanner", "file-code", "APK Scanner"),
    ("/threat-feed", "shield-alert", "Threat Feed"),
)

PAGE_TITLES = {href: label for href, _icon, label in NAV_ITEMS}


def get_page_title(path: str) -> str:
    """
    경로에서 헤더 제목 결정.

    Args:
        path: 요청 경로 (예: /url-scanner)

    Returns:
        페이지 제목 (알 수 없는 경로면 앱 이름)
    """
    return PAGE_TITLES.get(path.rstrip("/") or "/", APP_NAME)
