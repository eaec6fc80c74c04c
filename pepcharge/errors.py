"""Hierarquia de exceções do pacote."""


class PepChargeError(Exception):
    """Base de todos os erros do pepcharge."""


class InvalidSequenceError(PepChargeError, ValueError):
    """Sequência vazia ou com caracteres fora dos 20 aminoácidos canônicos."""

    def __init__(self, sequence: str, invalid: list[tuple[int, str]] | None = None):
        self.sequence = sequence
        self.invalid = invalid or []
        if not sequence:
            msg = "Sequência vazia"
        elif not self.invalid:
            msg = f"Sequência inválida: {sequence}"
        else:
            found = ", ".join(f"{c!r}@{i + 1}" for i, c in self.invalid)
            msg = f"Sequência {sequence!r} contém resíduos inválidos: {found}"
        super().__init__(msg)


class ConfigurationLoadError(PepChargeError, RuntimeError):
    """Tabela de constantes ausente ou malformada (fatal no carregamento)."""
