"""설계 패턴 예제 패키지.

Design pattern examples, each runnable on its own and covered by tests:

    - ioc: 제어의 역전 (Inversion of control, manual assembly)
    - observer: 옵저버 (Order placement fan-out through EventPublisher)
    - proxy: 프록시/AOP (Timing moved out of business code by log_execution)
    - template: 템플릿 메서드 (Fixed select → transform → save flow)
    - adapter: 어댑터 (Third-party JSON parser behind DataProcessor)
    - wiring: 수동 생성 vs 주입 (Self-constructed vs injected collaborators)
"""
