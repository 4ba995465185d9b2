"""
해시 계산: prompt_hash, response_hash, target_hash

규칙:
- SHA-256, 앞 16자리만 사용
- 포맷: "sha256:<hex16>"
- 사용자 입력(URL/APK 출처)은 로그에 원문 대신 해시로 남긴다
"""

import hashlib


def compute_hash(content: str) -> str:
    """SHA-256 해시 계산."""
    return f"sha256:{hashlib.sha256(content.encode()).hexdigest()[:16]}"


def hash_target(value: str) -> str:
    """
    스캔 대상 해시.

    앞뒤 공백과 대소문자 차이는 같은 대상으로 본다.

    Args:
        value: URL 또는 APK 메타데이터/출처

    Returns:
        "sha256:..." 해시
    """
    return compute_hash(value.strip().lower())
