"""
기반 모듈: 단변수 다항식(UnivariatePolynomial)과 Lagrange 보간
==============================================================

GKR 일반화 sum-check에서 Verifier는 라운드 메시지 [g(0), g(1), ..., g(d)]로부터
라운드 다항식 g(X)를 복원하여 챌린지 r에서 평가해야 한다.
이 모듈은 그 복원에 필요한 계수 표현 다항식을 제공한다.

**UnivariatePolynomial 클래스**:
  계수(coefficient) 표현 기반 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  - 평가: Horner's method
  - 덧셈, 곱셈(밀집 합성곱), 스칼라곱
  - Lagrange 보간: 점 집합 {(xᵢ, yᵢ)} → 유일한 최소 차수 다항식

**보간 공식**:
  p(X) = Σᵢ yᵢ · Lᵢ(X)
  Lᵢ(X) = ∏_{j≠i} (X - xⱼ) / ∏_{j≠i} (xᵢ - xⱼ)

사용 예시:
    >>> from zkgkr.polynomial import UnivariatePolynomial
    >>> p = UnivariatePolynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))  # 1 + 4 + 12 = FR(17)
    >>> q = UnivariatePolynomial.interpolate([(FR(2), FR(4)), (FR(4), FR(8))])
    >>> q.coefficients  # [FR(0), FR(2)]  → 2x
"""

from zkgkr.errors import DegenerateInput
from zkgkr.field import FR, is_field_element, field_of, to_field, to_field_list


# ─────────────────────────────────────────────────────────────────────
# UnivariatePolynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class UnivariatePolynomial:
    """유한체 위의 단변수 다항식 (밀집 계수 표현).

    계수 리스트로 표현: coefficients = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...

    차수는 저장된 계수 개수 - 1 이다. 최고차 0 계수를 잘라내지 않으므로
    [1, 0, 0]의 차수는 2로 보고된다.

    예시:
        >>> p = UnivariatePolynomial([FR(1), FR(2)])  # 1 + 2x
        >>> q = UnivariatePolynomial([FR(3), FR(4)])  # 3 + 4x
        >>> r = p + q                                 # 4 + 6x
        >>> r = p * q                                 # 3 + 10x + 8x²
    """

    def __init__(self, coefficients, field=None):
        """다항식 생성.

        Args:
            coefficients: 계수 리스트 [c₀, c₁, ...] (int 또는 필드 원소)
            field: 필드 클래스. None이면 계수에서 추론한다 (기본 FR).

        Raises:
            DegenerateInput: 계수 리스트가 비어 있는 경우
        """
        coefficients = list(coefficients)
        if not coefficients:
            raise DegenerateInput("다항식은 최소 하나의 계수가 필요합니다")
        self.field = field if field is not None else field_of(coefficients)
        self.coefficients = to_field_list(coefficients, self.field)

    @property
    def degree(self):
        """다항식의 차수 = 계수 개수 - 1."""
        return len(self.coefficients) - 1

    def evaluate(self, x):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        p(x) = c₀ + x(c₁ + x(c₂ + ...))

        Args:
            x: 평가할 점 (int 또는 필드 원소)

        Returns:
            p(x) 값

        예시:
            >>> p = UnivariatePolynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
            >>> p.evaluate(FR(2))  # FR(17)
        """
        x = to_field(x, self.field)
        result = self.field(0)
        for coeff in reversed(self.coefficients):
            result = result * x + coeff
        return result

    def __call__(self, x):
        return self.evaluate(x)

    def __add__(self, other):
        """다항식 덧셈: p(x) + q(x). 결과 길이 = 두 계수 리스트 중 긴 쪽."""
        if isinstance(other, int) or is_field_element(other):
            other = UnivariatePolynomial([other], self.field)
        max_len = max(len(self.coefficients), len(other.coefficients))
        zero = self.field(0)
        result = []
        for i in range(max_len):
            a = self.coefficients[i] if i < len(self.coefficients) else zero
            b = other.coefficients[i] if i < len(other.coefficients) else zero
            result.append(a + b)
        return UnivariatePolynomial(result, self.field)

    def __radd__(self, other):
        return self.__add__(other)

    def __mul__(self, other):
        """다항식 곱셈: p(x) · q(x) 또는 스칼라곱.

        다항식 × 다항식: O(n²) 밀집 합성곱(convolution)
        다항식 × 스칼라: 각 계수에 스칼라를 곱함
        """
        if isinstance(other, int) or is_field_element(other):
            return self.scale(other)
        result = [self.field(0)] * (len(self.coefficients) + len(other.coefficients) - 1)
        for i, a in enumerate(self.coefficients):
            for j, b in enumerate(other.coefficients):
                result[i + j] = result[i + j] + a * b
        return UnivariatePolynomial(result, self.field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def scale(self, scalar):
        """스칼라곱: scalar · p(x)."""
        scalar = to_field(scalar, self.field)
        return UnivariatePolynomial([c * scalar for c in self.coefficients], self.field)

    def __eq__(self, other):
        """계수 리스트 동등 비교."""
        if not isinstance(other, UnivariatePolynomial):
            return False
        return self.coefficients == other.coefficients

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coefficients):
            if c == self.field(0):
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "UniPoly(" + " + ".join(terms) + ")" if terms else "UniPoly(0)"

    def __len__(self):
        """계수 개수 반환 (차수 + 1)."""
        return len(self.coefficients)

    @classmethod
    def zero(cls, field=FR):
        """영 다항식 p(x) = 0 (덧셈 항등원)."""
        return cls([field(0)], field)

    @classmethod
    def one(cls, field=FR):
        """상수 다항식 p(x) = 1 (곱셈 항등원)."""
        return cls([field(1)], field)

    @classmethod
    def sum(cls, polys, field=FR):
        """다항식들의 합. 빈 입력이면 영 다항식."""
        result = cls.zero(field)
        for poly in polys:
            result = result + poly
        return result

    @classmethod
    def product(cls, polys, field=FR):
        """다항식들의 곱. 빈 입력이면 상수 1."""
        result = cls.one(field)
        for poly in polys:
            result = result * poly
        return result

    # ─────────────────────────────────────────────────────────────────
    # Lagrange 보간
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def basis(cls, i, xs, field=FR):
        """i번째 Lagrange 기저 다항식 Lᵢ(X)를 계수 형태로 반환한다.

        Lᵢ(X) = ∏_{j≠i} (X - xⱼ) / ∏_{j≠i} (xᵢ - xⱼ)

        분자 다항식을 곱으로 만든 뒤, xᵢ에서의 값의 역원을 곱해 정규화한다.
        성질: Lᵢ(xⱼ) = δᵢⱼ (크로네커 델타)

        Args:
            i: 기저 인덱스
            xs: 보간 x좌표 리스트 (필드 원소, 서로 달라야 함)
            field: 필드 클래스

        Returns:
            UnivariatePolynomial: Lᵢ(X)

        Raises:
            DegenerateInput: xᵢ와 같은 x좌표가 다른 인덱스에 있는 경우
        """
        numerator = cls.product(
            (cls([-x_j, field(1)], field) for j, x_j in enumerate(xs) if j != i),
            field,
        )
        denominator = numerator.evaluate(xs[i])
        if denominator == field(0):
            raise DegenerateInput(f"x좌표가 중복되었습니다: {int(xs[i])}")
        return numerator.scale(field(1) / denominator)

    @classmethod
    def interpolate(cls, points, field=None):
        """점 집합을 지나는 유일한 최소 차수 다항식을 반환한다.

        p(X) = Σᵢ yᵢ · Lᵢ(X)

        n개의 점이면 결과 계수는 정확히 n개 (차수 ≤ n-1).

        Args:
            points: (x, y) 쌍의 순서 있는 시퀀스
            field: 필드 클래스. None이면 좌표에서 추론한다.

        Returns:
            UnivariatePolynomial: 보간 다항식

        Raises:
            DegenerateInput: 점이 없거나 x좌표가 중복된 경우

        예시:
            >>> # f(x) = 2x 위의 점 (2, 4), (4, 8)
            >>> p = UnivariatePolynomial.interpolate([(2, 4), (4, 8)])
            >>> p.coefficients  # [FR(0), FR(2)]
        """
        points = list(points)
        if not points:
            raise DegenerateInput("보간할 점이 없습니다")
        if field is None:
            field = field_of([c for point in points for c in point])
        xs = [to_field(x, field) for x, _ in points]
        ys = [to_field(y, field) for _, y in points]

        if len(set(int(x) for x in xs)) != len(xs):
            raise DegenerateInput("보간 x좌표가 중복되었습니다")

        # 각 기저는 정확히 n개의 계수를 가지므로 합도 n개
        return cls.sum(
            (cls.basis(i, xs, field).scale(y) for i, y in enumerate(ys)),
            field,
        )
