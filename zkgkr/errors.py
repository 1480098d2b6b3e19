"""
sum-check / GKR 예외 계층
==========================

모든 예외는 ValueError를 상속한다. 모양(shape)·개수(arity) 위반은
호출 즉시 발생하고, 검증 실패는 예외가 아닌 반환값(False)으로 보고된다.
ProtocolFailure는 호출자가 명시적으로 요청할 때만 발생한다.
"""


class SumcheckError(ValueError):
    """zkgkr의 모든 오류의 기반 클래스."""


class InvalidShape(SumcheckError):
    """평가 벡터 길이가 2의 거듭제곱이 아니거나 비어 있음."""


class ShapeMismatch(InvalidShape):
    """피연산자(또는 인자/항)의 평가 벡터 길이가 서로 다름."""


class DegreeMismatch(InvalidShape):
    """SumPoly 항들의 차수(인자 개수)가 서로 다름."""


class ArityMismatch(SumcheckError):
    """평가점 값의 개수 또는 변수 인덱스가 변수 개수와 맞지 않음."""


class DegenerateInput(SumcheckError):
    """보간 입력이 퇴화됨 (x좌표 중복 또는 빈 점 집합)."""


class ProtocolFailure(SumcheckError):
    """sum-check 라운드 불일치 또는 최종 오라클 검사 실패."""

    def __init__(self, message, round_index=None):
        super().__init__(message)
        self.round_index = round_index
