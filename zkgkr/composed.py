"""
합성 다항식: ProductPoly(곱)와 SumPoly(곱들의 합)
===================================================

GKR 프로토콜의 각 레이어는 다중선형 다항식들의 "곱의 합" 형태를 합산한다:

    f(x) = Σₜ ∏ⱼ fₜ,ⱼ(x)

**ProductPoly**: 같은 변수 개수를 가진 다중선형 인자들의 점별 곱.
  차수(get_degree) = 인자 개수 d. 각 변수에 대해 d차 이하.

**SumPoly**: 같은 차수의 ProductPoly 항들의 점별 합.

**reduce()**:
  하이퍼큐브 위에서의 값 벡터로 축약한다.
  - ProductPoly: f₁ ⊙ f₂ ⊙ ... ⊙ f_d  (모든 인자를 왼쪽부터 점별 곱)
  - SumPoly: 각 항의 reduce() 벡터를 모두 점별 합

**partial_evaluate(value)**:
  변수 0(최상위 비트)을 value로 바인딩한다. 곱을 취하기 전에 각 인자를
  개별적으로 바인딩하므로, value가 0/1이 아닌 점(예: 2, 3)에서도
  곱 다항식의 정확한 제한(restriction)이 된다.

사용 예시:
    >>> a = ProductPoly([[0, 0, 2, 3], [1, 1, 1, 4]])
    >>> b = ProductPoly([[1, 0, 0, 1], [2, 2, 0, 0]])
    >>> s = SumPoly([a, b])
    >>> s.get_degree()          # 2
    >>> s.sum_over_hypercube()  # 정직한 claimed sum
"""

from zkgkr.errors import DegreeMismatch, InvalidShape, ShapeMismatch
from zkgkr.multilinear import MultilinearPoly


# ─────────────────────────────────────────────────────────────────────
# ProductPoly
# ─────────────────────────────────────────────────────────────────────

class ProductPoly:
    """다중선형 인자들의 점별 곱.

    속성:
        factors: MultilinearPoly 튜플 (모두 같은 길이)
    """

    def __init__(self, factors, field=None):
        """
        Args:
            factors: 평가 벡터 또는 MultilinearPoly의 시퀀스
            field: 평가 벡터를 변환할 필드 클래스 (None이면 추론)

        Raises:
            InvalidShape: 인자가 없거나 길이가 2의 거듭제곱이 아닌 경우
            ShapeMismatch: 인자들의 길이가 서로 다른 경우
        """
        factors = [
            f if isinstance(f, MultilinearPoly) else MultilinearPoly(f, field)
            for f in factors
        ]
        if not factors:
            raise InvalidShape("ProductPoly에는 최소 하나의 인자가 필요합니다")
        length = len(factors[0])
        for f in factors[1:]:
            if len(f) != length:
                raise ShapeMismatch(f"인자 길이가 다릅니다: {length} != {len(f)}")
        self.factors = tuple(factors)

    @property
    def n_vars(self):
        return self.factors[0].n_vars

    @property
    def field(self):
        return self.factors[0].field

    def get_degree(self):
        """인자 개수 = 각 변수에 대한 차수."""
        return len(self.factors)

    def evaluate(self, values):
        """각 인자의 evaluate(values)의 곱."""
        values = list(values)
        result = self.field(1)
        for f in self.factors:
            result = result * f.evaluate(values)
        return result

    def partial_evaluate(self, value):
        """모든 인자의 변수 0을 value로 바인딩한 새 ProductPoly."""
        return ProductPoly([f.partial_evaluate(0, value) for f in self.factors])

    def reduce(self):
        """모든 인자의 점별 곱 벡터 (왼쪽 접기)."""
        acc = self.factors[0]
        for f in self.factors[1:]:
            acc = acc.mul(f)
        return list(acc.evals)

    def __repr__(self):
        return f"ProductPoly(degree={self.get_degree()}, n_vars={self.n_vars})"


# ─────────────────────────────────────────────────────────────────────
# SumPoly
# ─────────────────────────────────────────────────────────────────────

class SumPoly:
    """같은 차수를 가진 ProductPoly 항들의 점별 합.

    속성:
        terms: ProductPoly 튜플
    """

    def __init__(self, terms):
        """
        Raises:
            InvalidShape: 항이 없는 경우
            DegreeMismatch: 항들의 get_degree()가 서로 다른 경우
            ShapeMismatch: 항들의 변수 개수가 서로 다른 경우
        """
        terms = list(terms)
        if not terms:
            raise InvalidShape("SumPoly에는 최소 하나의 항이 필요합니다")
        degree = terms[0].get_degree()
        n_vars = terms[0].n_vars
        for t in terms[1:]:
            if t.get_degree() != degree:
                raise DegreeMismatch(f"항 차수가 다릅니다: {degree} != {t.get_degree()}")
            if t.n_vars != n_vars:
                raise ShapeMismatch(f"항 변수 개수가 다릅니다: {n_vars} != {t.n_vars}")
        self.terms = tuple(terms)

    @property
    def n_vars(self):
        return self.terms[0].n_vars

    @property
    def field(self):
        return self.terms[0].field

    def get_degree(self):
        return self.terms[0].get_degree()

    def evaluate(self, values):
        """각 항의 evaluate(values)의 합."""
        values = list(values)
        result = self.field(0)
        for t in self.terms:
            result = result + t.evaluate(values)
        return result

    def partial_evaluate(self, value):
        """각 항의 변수 0을 value로 바인딩한 새 SumPoly."""
        return SumPoly([t.partial_evaluate(value) for t in self.terms])

    def reduce(self):
        """모든 항의 reduce() 벡터의 점별 합."""
        acc = self.terms[0].reduce()
        for t in self.terms[1:]:
            acc = [a + b for a, b in zip(acc, t.reduce())]
        return acc

    def sum_over_hypercube(self):
        """Σ_{x ∈ {0,1}^n} f(x): 정직한 Prover의 claimed sum."""
        total = self.field(0)
        for v in self.reduce():
            total = total + v
        return total

    def __repr__(self):
        return (
            f"SumPoly(terms={len(self.terms)}, degree={self.get_degree()}, "
            f"n_vars={self.n_vars})"
        )
