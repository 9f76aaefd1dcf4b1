"""Enumeration types for financial domain entities."""

from enum import Enum


class AccountType(str, Enum):
    CONTA_DEPOSITO_A_VISTA = "CONTA_DEPOSITO_A_VISTA"
    CONTA_POUPANCA = "CONTA_POUPANCA"
    CONTA_PAGAMENTO_PRE_PAGA = "CONTA_PAGAMENTO_PRE_PAGA"


class AccountSubType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    CONJUNTA_SIMPLES = "CONJUNTA_SIMPLES"
    CONJUNTA_SOLIDARIA = "CONJUNTA_SOLIDARIA"


class CreditDebitIndicator(str, Enum):
    CREDITO = "CREDITO"
    DEBITO = "DEBITO"


class CompletedAuthorisedPaymentIndicator(str, Enum):
    TRANSACAO_EFETIVADA = "TRANSACAO_EFETIVADA"
    LANCAMENTO_FUTURO = "LANCAMENTO_FUTURO"
    TRANSACAO_PROCESSANDO = "TRANSACAO_PROCESSANDO"


class TransactionType(str, Enum):
    TED = "TED"
    DOC = "DOC"
    PIX = "PIX"
    TRANSFERENCIA_MESMA_INSTITUICAO = "TRANSFERENCIA_MESMA_INSTITUICAO"
    BOLETO = "BOLETO"
    CONVENIO_ARRECADACAO = "CONVENIO_ARRECADACAO"
    PACOTE_TARIFA_SERVICOS = "PACOTE_TARIFA_SERVICOS"
    TARIFA_SERVICOS_AVULSOS = "TARIFA_SERVICOS_AVULSOS"
    FOLHA_PAGAMENTO = "FOLHA_PAGAMENTO"
    DEPOSITO = "DEPOSITO"
    SAQUE = "SAQUE"
    CARTAO = "CARTAO"
    ENCARGOS_JUROS_CHEQUE_ESPECIAL = "ENCARGOS_JUROS_CHEQUE_ESPECIAL"
    RENDIMENTO_APLIC_FINANCEIRA = "RENDIMENTO_APLIC_FINANCEIRA"
    PORTABILIDADE_SALARIO = "PORTABILIDADE_SALARIO"
    RESGATE_APLIC_FINANCEIRA = "RESGATE_APLIC_FINANCEIRA"
    OPERACAO_CREDITO = "OPERACAO_CREDITO"
    OUTROS = "OUTROS"


class PersonType(str, Enum):
    PESSOA_NATURAL = "PESSOA_NATURAL"
    PESSOA_JURIDICA = "PESSOA_JURIDICA"


class ConsentStatus(str, Enum):
    AWAITING_AUTHORISATION = "AWAITING_AUTHORISATION"
    AUTHORISED = "AUTHORISED"
    REJECTED = "REJECTED"
    REVOKED = "REVOKED"


class PermissionCategory(str, Enum):
    ACCOUNTS = "ACCOUNTS"
    CREDIT_CARDS = "CREDIT_CARDS"
    RESOURCES = "RESOURCES"


class Permission(str, Enum):
    """Consent permissions relevant to the accounts API.

    Only the accounts family and ``RESOURCES_READ`` are served here; the
    credit card family is listed so consents carrying it can be parsed.
    """

    ACCOUNTS_READ = "ACCOUNTS_READ"
    ACCOUNTS_BALANCES_READ = "ACCOUNTS_BALANCES_READ"
    ACCOUNTS_TRANSACTIONS_READ = "ACCOUNTS_TRANSACTIONS_READ"
    ACCOUNTS_OVERDRAFT_LIMITS_READ = "ACCOUNTS_OVERDRAFT_LIMITS_READ"
    CREDIT_CARDS_ACCOUNTS_READ = "CREDIT_CARDS_ACCOUNTS_READ"
    CREDIT_CARDS_ACCOUNTS_TRANSACTIONS_READ = "CREDIT_CARDS_ACCOUNTS_TRANSACTIONS_READ"
    RESOURCES_READ = "RESOURCES_READ"

    @property
    def category(self) -> PermissionCategory:
        """Product family the permission belongs to."""
        if self.value.startswith("ACCOUNTS_"):
            return PermissionCategory.ACCOUNTS
        if self.value.startswith("CREDIT_CARDS_"):
            return PermissionCategory.CREDIT_CARDS
        return PermissionCategory.RESOURCES

    @property
    def supported(self) -> bool:
        """Whether this API serves data for the permission."""
        return self.category is not PermissionCategory.CREDIT_CARDS
