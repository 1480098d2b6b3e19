"""
다중선형 다항식(MultilinearPoly): 불리언 하이퍼큐브 평가 표현
================================================================

다중선형 다항식은 각 변수에 대해 1차 이하인 다항식이며,
불리언 하이퍼큐브 {0,1}^n 위의 2^n개 값으로 완전히 결정된다.
이 모듈은 그 평가 벡터 표현과 변수 바인딩(부분 평가)을 제공한다.

**비트 규약**:
  평가 벡터의 인덱스는 n비트 부호 없는 정수이며,
  변수 0이 최상위 비트(MSB), 변수 n-1이 최하위 비트(LSB)를 차지한다.

      n = 3, 인덱스 6 = 0b110  →  (x₀, x₁, x₂) = (1, 1, 0)

**하이퍼큐브 짝짓기 (insert_bit / hypercube_pairs)**:
  변수 i를 바인딩하려면, 변수 i만 다른 두 꼭짓점 (…0…, …1…)을 짝지어야 한다.
  b = n - i - 1 (LSB로부터의 거리)일 때, k ∈ [0, 2^(n-1))에 대해
      zero_idx = insert_bit(k, b),  one_idx = zero_idx | (1 << b)

      n = 3, i = 0 (b = 2):  (0,4) (1,5) (2,6) (3,7)
      n = 3, i = 2 (b = 0):  (0,1) (2,3) (4,5) (6,7)

  이 짝짓기에서 한 비트만 어긋나도 모든 하위 프로토콜의 건전성이
  조용히 깨지므로, 필드 연산과 분리된 순수 정수 함수로 구현한다.

**부분 평가**:
  새 평가값[k] = evals[zero_idx] + value · (evals[one_idx] - evals[zero_idx])
  두 이웃 꼭짓점 사이의 정확한 선형 보간이다.

사용 예시:
    >>> from zkgkr.multilinear import MultilinearPoly
    >>> p = MultilinearPoly([0, 0, 0, 3, 0, 0, 2, 5])  # 2ab + 3bc
    >>> p.partial_evaluate(2, 3).evals   # (0, 9, 0, 11)
    >>> p.evaluate([1, 1, 1])            # FR(5)
"""

from zkgkr.errors import ArityMismatch, InvalidShape, ShapeMismatch
from zkgkr.field import field_of, to_field, to_field_list, concat_bytes_be


# ─────────────────────────────────────────────────────────────────────
# 하이퍼큐브 인덱스 연산 (순수 정수)
# ─────────────────────────────────────────────────────────────────────

def insert_bit(value, index):
    """value의 비트 위치 index에 0 비트를 삽입한다.

    index 이상의 비트는 한 칸 위로 밀리고, index 미만의 비트는 그대로 남는다.

    예시:
        >>> bin(insert_bit(3, 0))  # 0b110
        >>> bin(insert_bit(3, 1))  # 0b101
        >>> bin(insert_bit(3, 2))  # 0b11 (= 0b011)
    """
    high = value >> index
    low = value & ((1 << index) - 1)
    return (high << (index + 1)) | low


def hypercube_pairs(var_index, n_vars):
    """변수 var_index만 다른 꼭짓점 쌍 (zero_idx, one_idx) 리스트.

    Args:
        var_index: 바인딩할 변수 (0 = MSB)
        n_vars: 전체 변수 개수

    Returns:
        list[tuple[int, int]]: 길이 2^(n_vars-1)

    Raises:
        ArityMismatch: var_index가 [0, n_vars) 범위를 벗어난 경우
    """
    if not 0 <= var_index < n_vars:
        raise ArityMismatch(f"변수 인덱스 {var_index}가 범위 [0, {n_vars})를 벗어났습니다")
    bit = n_vars - var_index - 1
    pairs = []
    for k in range(1 << (n_vars - 1)):
        zero_idx = insert_bit(k, bit)
        pairs.append((zero_idx, zero_idx | (1 << bit)))
    return pairs


def log2_exact(n):
    """n이 2의 거듭제곱이면 log₂ n, 아니면 InvalidShape."""
    if n <= 0 or (n & (n - 1)) != 0:
        raise InvalidShape(f"평가 벡터 길이는 2의 거듭제곱이어야 합니다: {n}")
    return n.bit_length() - 1


# ─────────────────────────────────────────────────────────────────────
# MultilinearPoly 클래스
# ─────────────────────────────────────────────────────────────────────

class MultilinearPoly:
    """하이퍼큐브 평가 벡터로 표현된 다중선형 다항식.

    불변(immutable) 값 타입이다. 부분 평가, 덧셈, 뺄셈, 곱셈, 스칼라곱은
    모두 새 인스턴스를 반환하며 원본을 수정하지 않는다.

    속성:
        evals: 2^n_vars개의 필드 원소 튜플
        n_vars: 변수 개수
        field: 필드 클래스
    """

    def __init__(self, evals, field=None):
        """평가 벡터로부터 다항식을 생성한다.

        Args:
            evals: 하이퍼큐브 평가값 시퀀스 (int 또는 필드 원소)
            field: 필드 클래스. None이면 평가값에서 추론한다 (기본 FR).

        Raises:
            InvalidShape: 길이가 2의 거듭제곱이 아닌 경우 (0 포함)
        """
        evals = list(evals)
        n_vars = log2_exact(len(evals))
        field = field if field is not None else field_of(evals)
        self.field = field
        self.evals = tuple(to_field_list(evals, field))
        self.n_vars = n_vars

    def __len__(self):
        return len(self.evals)

    def __eq__(self, other):
        if not isinstance(other, MultilinearPoly):
            return False
        return self.evals == other.evals

    def __repr__(self):
        return f"MultilinearPoly(n_vars={self.n_vars}, evals={[int(e) for e in self.evals]})"

    # ── 평가 ──

    def partial_evaluate(self, var_index, value):
        """변수 var_index를 value로 바인딩한다.

        Args:
            var_index: 바인딩할 변수 (0 = MSB)
            value: 바인딩 값 (int 또는 필드 원소)

        Returns:
            MultilinearPoly: n_vars - 1개 변수의 다항식

        예시 (2ab + 3bc):
            >>> p = MultilinearPoly([0, 0, 0, 3, 0, 0, 2, 5])
            >>> p.partial_evaluate(2, 3).evals  # c=3 → (0, 9, 0, 11)
            >>> p.partial_evaluate(1, 3).evals  # b=3 → (0, 9, 6, 15)
        """
        value = to_field(value, self.field)
        evals = self.evals
        result = []
        for zero_idx, one_idx in hypercube_pairs(var_index, self.n_vars):
            a = evals[zero_idx]
            result.append(a + value * (evals[one_idx] - a))
        return MultilinearPoly(result, self.field)

    def multi_partial_evaluate(self, values):
        """앞쪽 변수들을 순서대로 바인딩한다.

        항상 남은 변수 중 최상위(변수 0)를 바인딩하므로
        values[0]은 원래 변수 0, values[1]은 원래 변수 1에 대응한다.

        Raises:
            ArityMismatch: len(values) > n_vars
        """
        values = list(values)
        if len(values) > self.n_vars:
            raise ArityMismatch(
                f"값 {len(values)}개는 변수 {self.n_vars}개보다 많습니다"
            )
        poly = self
        for value in values:
            poly = poly.partial_evaluate(0, value)
        return poly

    def evaluate(self, values):
        """모든 변수를 바인딩하여 스칼라 값을 반환한다.

        Raises:
            ArityMismatch: len(values) != n_vars
        """
        values = list(values)
        if len(values) != self.n_vars:
            raise ArityMismatch(
                f"값 {len(values)}개가 주어졌지만 변수는 {self.n_vars}개입니다"
            )
        return self.multi_partial_evaluate(values).evals[0]

    def sum_over_hypercube(self):
        """Σ_{x ∈ {0,1}^n} P(x): 평가 벡터의 합."""
        total = self.field(0)
        for e in self.evals:
            total = total + e
        return total

    # ── 점별(pointwise) 연산 ──

    def _check_same_shape(self, other):
        if len(self.evals) != len(other.evals):
            raise ShapeMismatch(
                f"평가 벡터 길이가 다릅니다: {len(self.evals)} != {len(other.evals)}"
            )

    def add(self, other):
        """점별 덧셈."""
        self._check_same_shape(other)
        return MultilinearPoly([a + b for a, b in zip(self.evals, other.evals)], self.field)

    def sub(self, other):
        """점별 뺄셈."""
        self._check_same_shape(other)
        return MultilinearPoly([a - b for a, b in zip(self.evals, other.evals)], self.field)

    def mul(self, other):
        """점별 곱셈. 결과는 하이퍼큐브 위에서 두 다항식의 곱과 일치한다."""
        self._check_same_shape(other)
        return MultilinearPoly([a * b for a, b in zip(self.evals, other.evals)], self.field)

    def scale(self, c):
        """모든 평가값에 스칼라 c를 곱한다."""
        c = to_field(c, self.field)
        return MultilinearPoly([e * c for e in self.evals], self.field)

    __add__ = add
    __sub__ = sub
    __mul__ = mul

    # ── 직렬화 ──

    def to_bytes(self):
        """평가 벡터를 빅엔디안 정규 인코딩의 연결로 직렬화한다 (트랜스크립트 흡수용)."""
        return concat_bytes_be(self.evals)
