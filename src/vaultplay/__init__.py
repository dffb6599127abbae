"""
vaultplay — vault custody и provably-fair settlement для coin-flip и рулетки.

Пакеты:
- core:       доменные модели, fixed-point математика, ошибки, контракты
- ledger:     интерфейс внешнего ledger, custody capability, in-memory ledger
- randomness: интерфейс источника случайности
- events:     append-only лог событий
- vault:      реестры vault / delegate vault
- settlement: проведение ставок
- audit:      проверка честности по логу
"""

__version__ = "0.1.0"
