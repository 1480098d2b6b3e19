"""
기본 Sum-check 프로토콜 (단일 다중선형 다항식)
===============================================

주장(claim):  Σ_{x ∈ {0,1}^n} P(x) = claimed_sum

**라운드 구조** (n = P의 변수 개수, 라운드당 변수 하나):

  ┌─────────────────────────────────────────────────────┐
  │  초기화: 트랜스크립트 ← P의 평가 벡터, claimed_sum    │
  ├─────────────────────────────────────────────────────┤
  │  라운드 j (j = 1..n):                               │
  │  Prover → Verifier: (Σ P|x=0, Σ P|x=1)            │
  │  Verifier → Prover: r_j  (Fiat-Shamir)             │
  │  P ← P(r_j, ·)                                      │
  ├─────────────────────────────────────────────────────┤
  │  최종: running_sum == P(r_1, ..., r_n) ?  (오라클)   │
  └─────────────────────────────────────────────────────┘

**라운드 메시지**:
  다중선형 P의 한 변수 제한 g_j(X)는 1차이므로
  두 값 (g_j(0), g_j(1))로 완전히 결정된다.
  Verifier는 g_j(0) + g_j(1) == running_sum 을 확인하고,
  선형 보간으로 running_sum ← g_j(0) + r_j · (g_j(1) - g_j(0)) 을 계산한다.

사용 예시:
    >>> from zkgkr.multilinear import MultilinearPoly
    >>> from zkgkr.sumcheck import prove, verify
    >>> p = MultilinearPoly([0, 0, 0, 3, 0, 0, 2, 5])
    >>> verify(p, prove(p, 10))  # True
    >>> verify(p, prove(p, 20))  # False
"""

import logging

from zkgkr.field import to_field, to_bytes_be, concat_bytes_be
from zkgkr.transcript import Transcript

_logger = logging.getLogger(__name__)


class Proof:
    """기본 sum-check 증명.

    속성:
        claimed_sum: 주장된 합 (필드 원소)
        round_messages: 변수당 하나의 (g(0), g(1)) 쌍 리스트
    """

    def __init__(self, claimed_sum, round_messages):
        self.claimed_sum = claimed_sum
        self.round_messages = [tuple(m) for m in round_messages]

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return False
        return (
            self.claimed_sum == other.claimed_sum
            and self.round_messages == other.round_messages
        )

    def __repr__(self):
        return f"Proof(claimed_sum={int(self.claimed_sum)}, rounds={len(self.round_messages)})"


def _open_transcript(poly, claimed_sum):
    """Prover와 Verifier가 공유하는 초기 흡수 순서: 평가 벡터 → claimed_sum."""
    transcript = Transcript(field=poly.field)
    transcript.append(poly.to_bytes())
    transcript.append(to_bytes_be(claimed_sum))
    return transcript


def prove(poly, claimed_sum):
    """sum-check 증명을 생성한다.

    claimed_sum이 틀려도 Prover는 실패하지 않는다. 정직하게 계산한
    라운드 메시지를 담은 증명을 반환하며, 그 증명은 검증에서 거부된다.

    Args:
        poly: MultilinearPoly P
        claimed_sum: 주장된 합 (int 또는 필드 원소)

    Returns:
        Proof
    """
    claimed_sum = to_field(claimed_sum, poly.field)
    transcript = _open_transcript(poly, claimed_sum)

    round_messages = []
    for round_index in range(poly.n_vars):
        # 남은 변수 중 최상위(변수 0)를 0/1로 고정한 합
        message = (
            poly.partial_evaluate(0, 0).sum_over_hypercube(),
            poly.partial_evaluate(0, 1).sum_over_hypercube(),
        )
        transcript.append(concat_bytes_be(message))
        challenge = transcript.challenge()
        round_messages.append(message)
        _logger.debug("sumcheck prove round %d: challenge=%d", round_index, int(challenge))

        poly = poly.partial_evaluate(0, challenge)

    return Proof(claimed_sum, round_messages)


def verify(poly, proof):
    """sum-check 증명을 검증한다.

    Args:
        poly: 공개된 MultilinearPoly P (최종 오라클로 직접 평가한다)
        proof: Proof

    Returns:
        bool: 모든 라운드와 최종 오라클 검사를 통과하면 True
    """
    if len(proof.round_messages) != poly.n_vars:
        _logger.info(
            "sumcheck rejected: %d round messages for %d variables",
            len(proof.round_messages), poly.n_vars,
        )
        return False

    claimed_sum = to_field(proof.claimed_sum, poly.field)
    transcript = _open_transcript(poly, claimed_sum)

    running_sum = claimed_sum
    challenges = []
    for round_index, message in enumerate(proof.round_messages):
        if len(message) != 2:
            _logger.info("sumcheck rejected: round %d message has %d entries", round_index, len(message))
            return False
        g0, g1 = (to_field(m, poly.field) for m in message)

        # ── 라운드 일관성: g(0) + g(1) == 이전 라운드의 값 ──
        if g0 + g1 != running_sum:
            _logger.info("sumcheck rejected: round %d sum mismatch", round_index)
            return False

        transcript.append(concat_bytes_be((g0, g1)))
        challenge = transcript.challenge()
        running_sum = g0 + challenge * (g1 - g0)
        challenges.append(challenge)
        _logger.debug("sumcheck verify round %d: challenge=%d", round_index, int(challenge))

    # ── 최종 오라클 검사: P(r_1, ..., r_n) 직접 평가 ──
    if running_sum != poly.evaluate(challenges):
        _logger.info("sumcheck rejected: final oracle evaluation mismatch")
        return False
    return True
