"""
Sum-check protocol tests: basic (single multilinear) and GKR (sum of products).

테스트 범위:
  - 완전성(completeness): 정직한 claimed sum은 항상 수락
  - 건전성(soundness): 틀린 claimed sum, 조작된 라운드 메시지 거부
  - 트랜스크립트 바인딩: 다른 다항식/트랜스크립트에 대한 증명 거부
  - GKR 라운드 메시지 길이 = degree + 1
  - 여러 레이어가 하나의 트랜스크립트를 공유하는 구성
"""

import copy
import random
import pytest

from zkgkr.errors import ProtocolFailure
from zkgkr.field import FR, CURVE_ORDER
from zkgkr.multilinear import MultilinearPoly
from zkgkr.composed import ProductPoly, SumPoly
from zkgkr.transcript import Transcript
from zkgkr.sumcheck import (
    Proof, prove, verify,
    GkrProof, GkrVerification, gkr_prove, gkr_verify, check_final_claim,
)


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def poly_2ab_3bc():
    """f(a, b, c) = 2ab + 3bc, 하이퍼큐브 위의 합 = 10."""
    return MultilinearPoly([0, 0, 0, 3, 0, 0, 2, 5])


@pytest.fixture
def sum_of_two_products():
    """두 개의 2차 곱으로 이루어진 SumPoly, 하이퍼큐브 위의 합 = 16."""
    a = ProductPoly([[0, 0, 2, 3], [1, 1, 1, 4]])
    b = ProductPoly([[1, 0, 0, 1], [2, 2, 0, 0]])
    return SumPoly([a, b])


def _random_mle(rng, n_vars):
    return MultilinearPoly([rng.randrange(CURVE_ORDER) for _ in range(1 << n_vars)])


def _random_sum_poly(rng, n_vars, degree, n_terms):
    terms = []
    for _ in range(n_terms):
        terms.append(ProductPoly([_random_mle(rng, n_vars) for _ in range(degree)]))
    return SumPoly(terms)


# ─────────────────────────────────────────────────────────────────────
# Basic sum-check
# ─────────────────────────────────────────────────────────────────────

class TestBasicSumcheck:
    def test_correct_claim_accepts(self, poly_2ab_3bc):
        proof = prove(poly_2ab_3bc, FR(10))
        assert verify(poly_2ab_3bc, proof) is True

    def test_incorrect_claim_rejects(self, poly_2ab_3bc):
        proof = prove(poly_2ab_3bc, FR(20))
        assert verify(poly_2ab_3bc, proof) is False

    def test_int_claim(self, poly_2ab_3bc):
        assert verify(poly_2ab_3bc, prove(poly_2ab_3bc, 10))

    def test_proof_shape(self, poly_2ab_3bc):
        proof = prove(poly_2ab_3bc, 10)
        assert isinstance(proof, Proof)
        assert proof.claimed_sum == FR(10)
        assert len(proof.round_messages) == 3
        assert all(len(m) == 2 for m in proof.round_messages)

    def test_first_round_message(self, poly_2ab_3bc):
        # a=0: 0+0+0+3,  a=1: 0+0+2+5
        proof = prove(poly_2ab_3bc, 10)
        assert proof.round_messages[0] == (FR(3), FR(7))

    def test_prover_is_deterministic(self, poly_2ab_3bc):
        assert prove(poly_2ab_3bc, 10) == prove(poly_2ab_3bc, 10)

    def test_prover_does_not_mutate_poly(self, poly_2ab_3bc):
        before = poly_2ab_3bc.evals
        prove(poly_2ab_3bc, 10)
        assert poly_2ab_3bc.evals == before

    def test_tampered_claimed_sum_rejects(self, poly_2ab_3bc):
        proof = prove(poly_2ab_3bc, 10)
        proof.claimed_sum = FR(11)
        assert not verify(poly_2ab_3bc, proof)

    def test_tampered_round_message_rejects(self, poly_2ab_3bc):
        proof = prove(poly_2ab_3bc, 10)
        g0, g1 = proof.round_messages[1]
        proof.round_messages[1] = (g0 + FR(1), g1)
        assert not verify(poly_2ab_3bc, proof)

    def test_sum_preserving_tamper_rejects(self, poly_2ab_3bc):
        # 라운드 0 검사는 통과하지만 이후 라운드 또는 오라클 검사에서 실패
        proof = prove(poly_2ab_3bc, 10)
        g0, g1 = proof.round_messages[0]
        proof.round_messages[0] = (g0 + FR(1), g1 - FR(1))
        assert not verify(poly_2ab_3bc, proof)

    def test_forged_first_round_for_wrong_claim_rejects(self, poly_2ab_3bc):
        # 틀린 claim 20에 맞춰 첫 메시지만 위조
        proof = prove(poly_2ab_3bc, 20)
        g0, g1 = proof.round_messages[0]
        proof.round_messages[0] = (g0 + FR(10), g1)
        assert not verify(poly_2ab_3bc, proof)

    def test_wrong_round_count_rejects(self, poly_2ab_3bc):
        proof = prove(poly_2ab_3bc, 10)
        proof.round_messages = proof.round_messages[:-1]
        assert not verify(poly_2ab_3bc, proof)

    def test_malformed_round_message_rejects(self, poly_2ab_3bc):
        proof = prove(poly_2ab_3bc, 10)
        proof.round_messages[0] = (FR(3), FR(7), FR(0))
        assert not verify(poly_2ab_3bc, proof)

    def test_proof_bound_to_polynomial(self, poly_2ab_3bc):
        # 같은 합(10)을 가진 다른 다항식에 대해서는 거부
        other = MultilinearPoly([10, 0, 0, 0, 0, 0, 0, 0])
        proof = prove(poly_2ab_3bc, 10)
        assert not verify(other, proof)

    def test_zero_variables(self):
        p = MultilinearPoly([7])
        assert verify(p, prove(p, 7))
        assert not verify(p, prove(p, 8))

    @pytest.mark.parametrize("n_vars", [1, 2, 3, 4, 5])
    def test_random_polynomials(self, n_vars):
        rng = random.Random(n_vars)
        p = _random_mle(rng, n_vars)
        proof = prove(p, p.sum_over_hypercube())
        assert verify(p, proof)
        assert not verify(p, prove(p, p.sum_over_hypercube() + FR(1)))


# ─────────────────────────────────────────────────────────────────────
# GKR sum-check
# ─────────────────────────────────────────────────────────────────────

class TestGkrProve:
    def test_round_message_length(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        assert isinstance(proof, GkrProof)
        assert len(proof.round_messages) == 2
        assert all(len(m) == 3 for m in proof.round_messages)

    def test_first_round_message(self, sum_of_two_products):
        # g(0) = 2, g(1) = 2 + 12, g(2) = 6 + 38
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        assert proof.round_messages[0] == [FR(2), FR(14), FR(44)]

    def test_challenges_recorded(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        assert len(proof.challenges) == 2
        assert proof.claimed_sum == FR(16)

    def test_round_message_length_degree_three(self):
        p = ProductPoly([[1, 2, 3, 4], [5, 6, 7, 8], [1, 0, 2, 1]])
        proof = gkr_prove(sum(p.reduce(), FR(0)), p, Transcript())
        assert all(len(m) == 4 for m in proof.round_messages)

    def test_prover_absorbs_into_caller_transcript(self, sum_of_two_products):
        t = Transcript()
        before = t.challenge()
        gkr_prove(FR(16), sum_of_two_products, t)
        assert t.challenge() != before


class TestGkrVerify:
    def test_honest_proof_verifies(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        result = gkr_verify(proof.round_messages, FR(16), Transcript())
        assert isinstance(result, GkrVerification)
        assert result.verified
        assert result.failed_round is None
        assert result.challenges == proof.challenges
        assert check_final_claim(sum_of_two_products, result)

    def test_final_claim_is_oracle_value(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        result = gkr_verify(proof.round_messages, FR(16), Transcript())
        assert result.final_claimed_sum == sum_of_two_products.evaluate(result.challenges)

    def test_wrong_claim_rejects_first_round(self, sum_of_two_products):
        proof = gkr_prove(FR(17), sum_of_two_products, Transcript())
        result = gkr_verify(proof.round_messages, FR(17), Transcript())
        assert not result.verified
        assert result.failed_round == 0
        assert not check_final_claim(sum_of_two_products, result)

    def test_raise_for_failure(self, sum_of_two_products):
        proof = gkr_prove(FR(17), sum_of_two_products, Transcript())
        result = gkr_verify(proof.round_messages, FR(17), Transcript())
        with pytest.raises(ProtocolFailure) as excinfo:
            result.raise_for_failure()
        assert excinfo.value.round_index == 0

    def test_raise_for_failure_passes(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        gkr_verify(proof.round_messages, FR(16), Transcript()).raise_for_failure()

    def test_tampered_message_rejects_at_that_round(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        messages = copy.deepcopy(proof.round_messages)
        messages[1][0] = messages[1][0] + FR(1)
        result = gkr_verify(messages, FR(16), Transcript())
        assert not result.verified
        assert result.failed_round == 1

    def test_sum_preserving_tamper_rejects_next_round(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        messages = copy.deepcopy(proof.round_messages)
        messages[0][0] = messages[0][0] + FR(1)
        messages[0][1] = messages[0][1] - FR(1)
        result = gkr_verify(messages, FR(16), Transcript())
        assert not result.verified
        assert result.failed_round == 1

    def test_tampered_high_degree_entry_caught_downstream(self, sum_of_two_products):
        # g(2)만 바꾸면 라운드 0은 통과하지만 보간값이 달라진다
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        messages = copy.deepcopy(proof.round_messages)
        messages[-1][2] = messages[-1][2] + FR(1)
        result = gkr_verify(messages, FR(16), Transcript())
        assert not (result.verified and check_final_claim(sum_of_two_products, result))

    def test_desynchronized_transcript_rejects(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        t = Transcript()
        t.append(b"extra")
        result = gkr_verify(proof.round_messages, FR(16), t)
        assert not (result.verified and check_final_claim(sum_of_two_products, result))

    def test_short_message_rejects(self):
        result = gkr_verify([[FR(1)]], FR(1), Transcript())
        assert not result.verified
        assert result.failed_round == 0

    def test_inconsistent_message_lengths_reject(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        messages = copy.deepcopy(proof.round_messages)
        messages[1].append(FR(0))
        result = gkr_verify(messages, FR(16), Transcript())
        assert not result.verified
        assert result.failed_round == 1

    def test_no_rounds(self):
        p = SumPoly([ProductPoly([[3], [4]])])
        proof = gkr_prove(FR(12), p, Transcript())
        assert proof.round_messages == []
        result = gkr_verify(proof.round_messages, FR(12), Transcript())
        assert result.verified
        assert check_final_claim(p, result)

    def test_check_final_claim_wrong_poly(self, sum_of_two_products):
        proof = gkr_prove(FR(16), sum_of_two_products, Transcript())
        result = gkr_verify(proof.round_messages, FR(16), Transcript())
        other = SumPoly([ProductPoly([[2, 0, 2, 12], [1, 1, 1, 1]])])
        assert not check_final_claim(other, result)
        with pytest.raises(ProtocolFailure):
            check_final_claim(other, result, raise_on_failure=True)

    def test_product_poly_directly(self):
        p = ProductPoly([[1, 2, 3, 4], [5, 6, 7, 8], [1, 0, 2, 1]])
        claim = sum(p.reduce(), FR(0))
        proof = gkr_prove(claim, p, Transcript())
        result = gkr_verify(proof.round_messages, claim, Transcript())
        assert result.verified
        assert check_final_claim(p, result)

    @pytest.mark.parametrize("n_vars,degree,n_terms", [
        (1, 1, 1),
        (2, 2, 2),
        (3, 2, 3),
        (3, 3, 2),
        (4, 1, 2),
    ])
    def test_random_sum_polys(self, n_vars, degree, n_terms):
        rng = random.Random(n_vars * 100 + degree * 10 + n_terms)
        f = _random_sum_poly(rng, n_vars, degree, n_terms)
        claim = f.sum_over_hypercube()
        proof = gkr_prove(claim, f, Transcript())
        assert all(len(m) == degree + 1 for m in proof.round_messages)
        result = gkr_verify(proof.round_messages, claim, Transcript())
        assert result.verified
        assert check_final_claim(f, result)

        bad = gkr_verify(proof.round_messages, claim + FR(1), Transcript())
        assert not bad.verified


class TestGkrComposition:
    def test_layers_share_one_transcript(self, sum_of_two_products):
        layer2 = SumPoly([ProductPoly([[1, 2, 3, 4, 5, 6, 7, 8], [2, 0, 1, 1, 3, 0, 0, 1]])])
        claim1 = sum_of_two_products.sum_over_hypercube()
        claim2 = layer2.sum_over_hypercube()

        prover_t = Transcript(label=b"gkr")
        prover_t.append_scalar(claim1)
        proof1 = gkr_prove(claim1, sum_of_two_products, prover_t)
        prover_t.append_scalar(claim2)
        proof2 = gkr_prove(claim2, layer2, prover_t)

        verifier_t = Transcript(label=b"gkr")
        verifier_t.append_scalar(claim1)
        result1 = gkr_verify(proof1.round_messages, claim1, verifier_t)
        verifier_t.append_scalar(claim2)
        result2 = gkr_verify(proof2.round_messages, claim2, verifier_t)

        assert result1.verified and check_final_claim(sum_of_two_products, result1)
        assert result2.verified and check_final_claim(layer2, result2)
        assert result2.challenges == proof2.challenges

    def test_second_layer_depends_on_first(self, sum_of_two_products):
        layer2 = SumPoly([ProductPoly([[1, 2, 3, 4], [4, 3, 2, 1]])])
        claim2 = layer2.sum_over_hypercube()

        shared = Transcript()
        gkr_prove(FR(16), sum_of_two_products, shared)
        chained = gkr_prove(claim2, layer2, shared)
        fresh = gkr_prove(claim2, layer2, Transcript())
        assert chained.challenges != fresh.challenges
