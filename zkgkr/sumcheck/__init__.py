"""
Sum-check 프로토콜: Prover / Verifier
========================================

두 가지 sum-check 변형을 제공한다.

  ┌─────────────────────────────────────────────────────┐
  │  basic: 단일 다중선형 다항식 P                       │
  │  prove(P, claimed_sum) → Proof                     │
  │  verify(P, proof) → bool  (최종 오라클 검사 포함)    │
  ├─────────────────────────────────────────────────────┤
  │  gkr: 곱의 합 SumPoly f (차수 d)                    │
  │  gkr_prove(claim, f, transcript) → GkrProof        │
  │  gkr_verify(messages, claim, transcript)           │
  │      → GkrVerification  (오라클 검사는 호출자 몫)    │
  └─────────────────────────────────────────────────────┘

사용 예시:
    >>> from zkgkr.sumcheck import prove, verify, gkr_prove, gkr_verify
"""

from zkgkr.sumcheck.basic import Proof, prove, verify
from zkgkr.sumcheck.gkr import (
    GkrProof,
    GkrVerification,
    gkr_prove,
    gkr_verify,
    check_final_claim,
)

__all__ = [
    "Proof",
    "prove",
    "verify",
    "GkrProof",
    "GkrVerification",
    "gkr_prove",
    "gkr_verify",
    "check_final_claim",
]
