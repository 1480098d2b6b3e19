"""
GKR 일반화 Sum-check 프로토콜 (곱의 합)
========================================

주장(claim):  Σ_{x ∈ {0,1}^n} f(x) = claimed_sum,
             f = SumPoly = Σₜ ∏ⱼ fₜ,ⱼ  (각 항은 d개의 다중선형 인자의 곱)

기본 sum-check와 같은 모양이지만, 라운드 다항식 g_j(X)가 d차이므로
Prover는 d+1개의 점에서 샘플한 값을 보낸다:

    message_j = [g_j(0), g_j(1), ..., g_j(d)]
    g_j(i) = Σ reduce(f.partial_evaluate(i))

Verifier는 (i, message_j[i]) 점들로 g_j를 Lagrange 보간하여 r_j에서 평가한다.

**트랜스크립트 소유권**:
  여러 GKR 레이어가 하나의 트랜스크립트를 공유할 수 있도록
  트랜스크립트는 호출자가 생성·소유하고 gkr_prove / gkr_verify에 전달한다.
  claimed_sum을 트랜스크립트에 묶는(bind) 것도 호출자의 책임이다.

**최종 검사**:
  gkr_verify는 라운드 일관성 사슬만 검증하고 최종 오라클 검사는 하지 않는다.
  호출자는 final_claimed_sum을 실제 합성 다항식(또는 GKR 레이어 오라클)의
  challenges에서의 값과 비교해야 한다 (check_final_claim).

사용 예시:
    >>> proof = gkr_prove(claim, sum_poly, Transcript())
    >>> result = gkr_verify(proof.round_messages, claim, Transcript())
    >>> result.verified and check_final_claim(sum_poly, result)  # True
"""

import logging

from zkgkr.errors import ProtocolFailure
from zkgkr.field import to_field, concat_bytes_be
from zkgkr.polynomial import UnivariatePolynomial

_logger = logging.getLogger(__name__)


class GkrProof:
    """GKR sum-check 증명.

    속성:
        round_messages: 라운드별 [g(0), ..., g(d)] 리스트 (각 길이 d+1)
        claimed_sum: 주장된 합
        challenges: Prover 측에서 도출된 챌린지 리스트
    """

    def __init__(self, round_messages, claimed_sum, challenges):
        self.round_messages = [list(m) for m in round_messages]
        self.claimed_sum = claimed_sum
        self.challenges = list(challenges)

    def __repr__(self):
        return (
            f"GkrProof(claimed_sum={int(self.claimed_sum)}, "
            f"rounds={len(self.round_messages)})"
        )


class GkrVerification:
    """gkr_verify의 결과.

    속성:
        verified: 모든 라운드 일관성 검사를 통과했는지 여부
        final_claimed_sum: 마지막 라운드 다항식을 마지막 챌린지에서 평가한 값.
            호출자가 오라클 f(challenges)와 비교해야 한다.
        challenges: 검증 측에서 도출된 챌린지 리스트
        failed_round: 처음 실패한 라운드 인덱스 (통과 시 None)
    """

    def __init__(self, verified, final_claimed_sum, challenges, failed_round=None):
        self.verified = verified
        self.final_claimed_sum = final_claimed_sum
        self.challenges = list(challenges)
        self.failed_round = failed_round

    def __bool__(self):
        return self.verified

    def raise_for_failure(self):
        """검증이 실패했으면 ProtocolFailure를 발생시킨다."""
        if not self.verified:
            raise ProtocolFailure(
                f"GKR sum-check 라운드 {self.failed_round}에서 불일치",
                round_index=self.failed_round,
            )

    def __repr__(self):
        return (
            f"GkrVerification(verified={self.verified}, "
            f"rounds={len(self.challenges)}, failed_round={self.failed_round})"
        )


def _round_message(composed_poly):
    """message[i] = Σ reduce(f.partial_evaluate(i)),  i = 0..d."""
    field = composed_poly.field
    message = []
    for i in range(composed_poly.get_degree() + 1):
        total = field(0)
        for v in composed_poly.partial_evaluate(field(i)).reduce():
            total = total + v
        message.append(total)
    return message


def gkr_prove(claimed_sum, composed_poly, transcript):
    """GKR 일반화 sum-check 증명을 생성한다.

    Args:
        claimed_sum: 주장된 합
        composed_poly: SumPoly (ProductPoly도 같은 인터페이스로 동작한다)
        transcript: 호출자 소유의 Transcript (라운드 메시지가 흡수된다)

    Returns:
        GkrProof
    """
    claimed_sum = to_field(claimed_sum, composed_poly.field)
    round_messages = []
    challenges = []

    for round_index in range(composed_poly.n_vars):
        message = _round_message(composed_poly)

        transcript.append(concat_bytes_be(message))
        challenge = transcript.challenge()
        challenges.append(challenge)
        round_messages.append(message)
        _logger.debug("gkr prove round %d: challenge=%d", round_index, int(challenge))

        composed_poly = composed_poly.partial_evaluate(challenge)

    return GkrProof(round_messages, claimed_sum, challenges)


def gkr_verify(round_messages, claimed_sum, transcript):
    """GKR 일반화 sum-check의 라운드 일관성 사슬을 검증한다.

    라운드 검사는 message[0] + message[1] == running_sum 이다.
    message[i]는 정의상 g(i) 값이므로, 전체 메시지를 보간한 다항식의
    g(0) + g(1)과 정확히 같다 (보간 다항식은 모든 샘플 점을 지난다).

    메시지가 2개 미만의 값을 가지거나 라운드마다 길이가 다르면 거부한다.

    Args:
        round_messages: 라운드별 [g(0), ..., g(d)]
        claimed_sum: 주장된 합
        transcript: 호출자 소유의 Transcript (Prover와 같은 상태여야 함)

    Returns:
        GkrVerification (최종 오라클 검사는 포함하지 않음)
    """
    field = transcript.field
    running_sum = to_field(claimed_sum, field)
    challenges = []
    expected_len = len(round_messages[0]) if round_messages else 0

    for round_index, message in enumerate(round_messages):
        message = [to_field(m, field) for m in message]
        if len(message) < 2 or len(message) != expected_len:
            _logger.info(
                "gkr sumcheck rejected: round %d message has %d entries",
                round_index, len(message),
            )
            return GkrVerification(False, running_sum, challenges, round_index)

        if message[0] + message[1] != running_sum:
            _logger.info("gkr sumcheck rejected: round %d sum mismatch", round_index)
            return GkrVerification(False, running_sum, challenges, round_index)

        transcript.append(concat_bytes_be(message))
        challenge = transcript.challenge()
        challenges.append(challenge)
        _logger.debug("gkr verify round %d: challenge=%d", round_index, int(challenge))

        round_poly = UnivariatePolynomial.interpolate(
            [(field(i), y) for i, y in enumerate(message)], field
        )
        running_sum = round_poly.evaluate(challenge)

    return GkrVerification(True, running_sum, challenges)


def check_final_claim(composed_poly, verification, raise_on_failure=False):
    """호출자 측 최종 오라클 검사: f(challenges) == final_claimed_sum.

    Args:
        composed_poly: 실제 합성 다항식 (SumPoly 또는 ProductPoly)
        verification: gkr_verify의 결과
        raise_on_failure: True이면 실패 시 ProtocolFailure를 발생시킨다

    Returns:
        bool
    """
    ok = (
        verification.verified
        and len(verification.challenges) == composed_poly.n_vars
        and composed_poly.evaluate(verification.challenges) == verification.final_claimed_sum
    )
    if not ok:
        _logger.info("gkr sumcheck rejected: final oracle evaluation mismatch")
        if raise_on_failure:
            raise ProtocolFailure("GKR 최종 오라클 검사 실패", round_index=verification.failed_round)
    return ok
