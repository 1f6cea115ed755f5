from datetime import date, datetime, time

FORMATO_FECHA = "%d/%m/%Y"
FORMATO_HORA = "%H:%M:%S"
# Mesmo comportamento do cast `::time` do Postgres, que aceita HH:MM
_FORMATOS_HORA_ACEITOS = (FORMATO_HORA, "%H:%M")


def parse_fecha(valor: str) -> date:
    """Converte `DD/MM/YYYY` em date. Lança ValueError se não for possível."""
    return datetime.strptime(str(valor).strip(), FORMATO_FECHA).date()


def parse_hora(valor: str) -> time:
    """Converte `HH:MM:SS` (ou `HH:MM`) em time. Lança ValueError se não for possível."""
    texto = str(valor).strip()
    for formato in _FORMATOS_HORA_ACEITOS:
        try:
            return datetime.strptime(texto, formato).time()
        except ValueError:
            continue
    raise ValueError(f"hora inválida: {valor!r}")


def format_fecha(valor: date) -> str:
    return valor.strftime(FORMATO_FECHA)


def format_hora(valor: time) -> str:
    return valor.strftime(FORMATO_HORA)
