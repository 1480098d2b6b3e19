"""
Fiat-Shamir Transcript
=======================

비대화식(non-interactive) 변환을 위한 Fiat-Shamir 해싱 구현.

**Fiat-Shamir 변환이란?**
  sum-check는 원래 대화식(interactive) 프로토콜이다:
  - Prover가 라운드 메시지를 보내면
  - Verifier가 랜덤 챌린지 r을 보내고
  - Prover는 r로 변수를 바인딩하여 다음 라운드를 진행한다

  Fiat-Shamir 변환은 Verifier의 랜덤 챌린지를 지금까지의 메시지의 해시로 대체한다.
  Prover와 Verifier가 바이트 단위로 동일한 메시지를 동일한 순서로 흡수하면
  동일한 챌린지가 생성된다. 이 규율이 건전성(soundness)의 핵심 계약이다.

**흡수/추출 규율**:
  - append(bytes): 누적 해시 상태에 흡수. 순서에 민감하며 세션 중 초기화 불가.
  - challenge(): 현재 상태의 "복사본"을 마무리(finalize)하여 다이제스트를 얻고,
    리틀엔디안 정수로 읽어 mod p. 원래 상태는 변경되지 않는다.
    → append 없이 두 번 호출하면 같은 값이 나온다.
    → 다음 챌린지를 요청하기 전에 반드시 이전 라운드 메시지를 append 해야 한다.

**해시 함수**:
  SHA3-256 (Keccak 계열 스펀지). hashlib의 해시 객체는 copy()로
  상태를 복제할 수 있으므로 copy-on-finalize를 그대로 구현할 수 있다.

사용 예시:
    >>> t = Transcript()
    >>> t.append(b"hello")
    >>> r1 = t.challenge()
    >>> r1 == t.challenge()   # True (상태 불변)
    >>> t.append_scalar(FR(7))
    >>> r2 = t.challenge()    # r1과 다름
"""

import hashlib
from zkgkr.field import FR, from_digest, to_bytes_be, concat_bytes_be


class Transcript:
    """SHA3-256 기반 Fiat-Shamir 트랜스크립트.

    하나의 증명/검증 세션이 독점적으로 소유한다. 누적 상태를 복제하여
    서로 다른 두 도출 경로에 사용하면 바인딩 성질이 깨지므로
    공개 copy()는 제공하지 않는다.

    속성:
        field: 챌린지가 속하는 필드 클래스
    """

    def __init__(self, label=b"", field=FR):
        """트랜스크립트를 초기화한다.

        Args:
            label: 도메인 분리용 레이블. 기본값(b"")이면 빈 상태로 시작한다.
            field: 챌린지 필드 클래스 (기본값: FR)
        """
        self.field = field
        self._hasher = hashlib.sha3_256()
        if label:
            self._hasher.update(bytes(label))

    def append(self, data):
        """바이트열을 누적 상태에 흡수한다."""
        self._hasher.update(bytes(data))

    def append_scalar(self, scalar):
        """필드 원소를 32바이트 빅엔디안으로 흡수한다."""
        self.append(to_bytes_be(scalar))

    def append_scalars(self, scalars):
        """필드 원소 시퀀스를 빅엔디안 인코딩의 연결로 한 번에 흡수한다."""
        self.append(concat_bytes_be(scalars))

    def challenge(self):
        """현재 상태로부터 챌린지 필드 원소를 도출한다.

        누적 상태의 복사본을 마무리하므로 이 호출은 상태를 바꾸지 않는다.

        Returns:
            field 원소: H(state)를 리틀엔디안 정수로 읽은 값 mod p
        """
        digest = self._hasher.copy().digest()
        return from_digest(digest, self.field)
