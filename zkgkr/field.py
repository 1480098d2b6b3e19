"""
기반 모듈: 유한체(Finite Field) 원소와 바이트 인코딩
=====================================================

이 모듈은 sum-check / GKR 프로토콜 전체에서 사용되는 유한체 원소를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field).
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - 산술 연산(+, -, *, /)은 py_ecc의 FQ 클래스가 제공한다 (직접 구현하지 않음)

**제네릭 필드**:
  다항식과 프로토콜 코드는 특정 필드에 묶이지 않는다.
  py_ecc FQ를 상속하고 field_modulus를 지정한 클래스라면 어느 것이든 사용할 수 있다.
  필드 클래스는 원소 자신(type(x))에서 얻거나 field= 인자로 전달한다.

**바이트 인코딩**:
  Fiat-Shamir 트랜스크립트는 필드 원소를 정규(canonical) 바이트열로 흡수한다.
  - to_bytes_be / to_bytes_le: 고정 폭 빅/리틀 엔디안 인코딩
  - from_digest: 해시 다이제스트 → 리틀 엔디안 정수 → mod p

사용 예시:
    >>> from zkgkr.field import FR, to_bytes_be, from_digest
    >>> a = FR(3)
    >>> to_bytes_be(a)[-1]   # 3
    >>> from_digest(b"\\x05" + b"\\x00" * 31)  # FR(5)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order


# ─────────────────────────────────────────────────────────────────────
# 필드 변환 헬퍼
# ─────────────────────────────────────────────────────────────────────

def is_field_element(value):
    """value가 py_ecc 소수체 원소인지 확인."""
    return isinstance(value, FQ)


def to_field(value, field=FR):
    """정수 또는 필드 원소를 field 원소로 변환한다.

    이미 field의 원소이면 그대로 반환한다. 다른 필드의 원소는
    정수값을 거쳐 재해석된다 (mod field.field_modulus).

    Args:
        value: int 또는 FQ 계열 원소
        field: 대상 필드 클래스 (기본값: FR)

    Returns:
        field 원소
    """
    if isinstance(value, field):
        return value
    if isinstance(value, FQ):
        return field(int(value))
    return field(value)


def to_field_list(values, field=FR):
    """시퀀스의 모든 값을 field 원소 리스트로 변환한다."""
    return [to_field(v, field) for v in values]


def field_of(values, default=FR):
    """values 중 처음 나타나는 필드 원소의 클래스를 반환한다.

    필드 원소가 하나도 없으면 (예: 정수 리스트) default를 반환한다.

    예시:
        >>> field_of([1, FR(2)])  # FR
        >>> field_of([1, 2])      # FR (기본값)
    """
    for v in values:
        if isinstance(v, FQ):
            return type(v)
    return default


# ─────────────────────────────────────────────────────────────────────
# 정규(canonical) 바이트 인코딩
# ─────────────────────────────────────────────────────────────────────

def byte_length(field=FR):
    """필드 원소 하나의 정규 인코딩 폭 (바이트).

    bn128의 경우 p < 2^254 이므로 32바이트.
    """
    return (field.field_modulus.bit_length() + 7) // 8


def to_bytes_be(x):
    """필드 원소를 고정 폭 빅엔디안 바이트열로 인코딩한다."""
    field = type(x)
    return (int(x) % field.field_modulus).to_bytes(byte_length(field), "big")


def to_bytes_le(x):
    """필드 원소를 고정 폭 리틀엔디안 바이트열로 인코딩한다."""
    field = type(x)
    return (int(x) % field.field_modulus).to_bytes(byte_length(field), "little")


def from_bytes_be(data, field=FR):
    """임의 길이 빅엔디안 바이트열을 필드 원소로 해석한다 (mod p)."""
    return field(int.from_bytes(bytes(data), "big") % field.field_modulus)


def from_bytes_le(data, field=FR):
    """임의 길이 리틀엔디안 바이트열을 필드 원소로 해석한다 (mod p)."""
    return field(int.from_bytes(bytes(data), "little") % field.field_modulus)


def from_digest(digest, field=FR):
    """해시 다이제스트를 필드 원소로 변환한다.

    다이제스트 바이트를 부호 없는 리틀엔디안 정수로 읽고
    필드 위수로 축소한다. Fiat-Shamir 챌린지 도출에 사용된다.

    Args:
        digest: 해시 출력 바이트열
        field: 대상 필드 클래스

    Returns:
        field 원소
    """
    return from_bytes_le(digest, field)


def concat_bytes_be(values):
    """필드 원소 시퀀스를 빅엔디안 인코딩의 연결로 직렬화한다.

    sum-check 프로토콜에서 평가 벡터와 라운드 메시지를
    트랜스크립트에 흡수할 때 사용하는 형태이다.
    """
    return b"".join(to_bytes_be(v) for v in values)
