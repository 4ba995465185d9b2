"""
대시보드 / 위협 피드 샘플 데이터.

영속화 계층이 없으므로 두 화면은 고정 데이터를 렌더링한다.
차트 값만 요청마다 무작위로 생성.
"""

import random
from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class StatCard:
    title: str
    value: str
    note: str
    icon: str
    tone: str = "muted"  # muted, destructive, success


@dataclass
class RecentActivity:
    type: str  # URL, APK
    value: str
    status: str  # Phishing, Malicious, Safe
    date: str

    @property
    def badge_variant(self) -> str:
        return "secondary" if self.status == "Safe" else "destructive"


@dataclass
class ThreatFeedEntry:
    type: str  # URL, APK, INTERNAL
    value: str
    reason: str
    timestamp: str
    severity: str  # Critical, High, Medium, Low

    @property
    def badge_variant(self) -> str:
        return get_severity_badge(self.severity)

    @property
    def icon(self) -> str:
        return get_feed_icon(self.type)

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "badge_variant": self.badge_variant}


STAT_CARDS: tuple[StatCard, ...] = (
    StatCard("Total Scans", "12,543", "+12.1% from last month", "scan-line"),
    StatCard("Threats Found", "342", "+23% from last month", "shield-x", "destructive"),
    StatCard("Safe Entities", "12,201", "97.3% success rate", "shield-check", "success"),
)

RECENT_ACTIVITIES: tuple[RecentActivity, ...] = (
    RecentActivity("URL", "http://evil-site.com", "Phishing", "2 mins ago"),
    RecentActivity("APK", "com.malware.app", "Malicious", "5 mins ago"),
    RecentActivity("URL", "http://safe-site.com", "Safe", "10 mins ago"),
    RecentActivity("APK", "com.game.fun", "Safe", "23 mins ago"),
    RecentActivity("URL", "http://get-free-stuff.net", "Phishing", "1 hour ago"),
)

THREAT_FEED: tuple[ThreatFeedEntry, ...] = (
    ThreatFeedEntry(
        "URL",
        "http://verify-yoursecurity-details.com",
        "Domain mimics a legitimate financial institution to steal credentials.",
        "2 minutes ago",
        "High",
    ),
    ThreatFeedEntry(
        "APK",
        "FreeAntivirus.apk",
        "Requests excessive permissions, including reading contacts and sending SMS messages.",
        "15 minutes ago",
        "Critical",
    ),
    ThreatFeedEntry(
        "URL",
        "http://amazon-prime-rewardz.net",
        "Suspicious TLD (.net) for an Amazon-related site. Aims to collect personal information.",
        "45 minutes ago",
        "High",
    ),
    ThreatFeedEntry(
        "APK",
        "PhotoEditorPro.apk",
        "Contains known spyware libraries that exfiltrate user data to a remote server.",
        "1 hour ago",
        "Critical",
    ),
    ThreatFeedEntry(
        "URL",
        "http://microsft-support-online.info",
        "Misspelled domain name ('microsft') to impersonate Microsoft support.",
        "3 hours ago",
        "High",
    ),
    ThreatFeedEntry(
        "URL",
        "http://secure.bankofamerica.com.login.ws",
        "Uses multiple subdomains to obscure the true, non-bank domain.",
        "5 hours ago",
        "Medium",
    ),
    ThreatFeedEntry(
        "INTERNAL",
        "API_GATEWAY_AUTH_FAILURE",
        "Authentication token expired for internal service communication.",
        "6 hours ago",
        "Medium",
    ),
)

CHART_DAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
CHART_MIN_TOTAL = 500
CHART_MAX_TOTAL = 2499


def get_severity_badge(severity: str) -> str:
    """심각도 → 배지 variant."""
    level = severity.lower()
    if level in ("critical", "high"):
        return "destructive"
    if level == "medium":
        return "secondary"
    return "outline"


def get_feed_icon(entry_type: str) -> str:
    """피드 항목 타입 → 아이콘 이름."""
    icons = {
        "URL": "link",
        "APK": "file-code",
        "INTERNAL": "server-crash",
    }
    return icons.get(entry_type, "shield-alert")


def build_chart_data(rng: random.Random | None = None) -> list[dict[str, Any]]:
    """
    최근 7일 스캔 활동 차트 데이터.

    Args:
        rng: 테스트용 난수 생성기 (None이면 모듈 random)

    Returns:
        [{"name": "Sun", "total": 1234}, ...]
    """
    source = rng or random
    return [
        {"name": day, "total": source.randint(CHART_MIN_TOTAL, CHART_MAX_TOTAL)}
        for day in CHART_DAYS
    ]
