from enum import Enum


class ContractStatus(str, Enum):
    ativo = "ativo"
    pendente = "pendente"
    encerrado = "encerrado"
    renovado = "renovado"


class TemplateType(str, Enum):
    residential = "residential"
    commercial = "commercial"


class PropertyType(str, Enum):
    apartamento = "apartamento"
    casa = "casa"
    comercial = "comercial"
    terreno = "terreno"


class AdjustmentIndex(str, Enum):
    igpm = "IGP-M"
    ipca = "IPCA"
    inpc = "INPC"
