"""
Logger principal do BoatHub.

Implementa a interface ILoggingService com saída colorida via rich e
escrita opcional em arquivo. Toda a API pública é em português.

Uso típico::

    from boathub.core.logging import log

    log.info("Cliente iniciado", base_url="http://localhost:8080")

    with log.etapa("Login", usuario="admin"):
        ...

    sessao_logger = log.com_contexto(componente="sessao")
    sessao_logger.sucesso("Sessão autenticada")
"""

from __future__ import annotations

import atexit
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from rich.console import Console
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from boathub.interfaces.services import ILoggingService

from .config import LEVEL_VALUES, LoggerConfig, normalize_level

_DEFAULT_THEME = Theme(
    {
        "log.time": "cyan dim",
        "log.debug": "dim",
        "log.info": "white",
        "log.success": "bold green",
        "log.warning": "yellow",
        "log.error": "bold red",
        "log.critical": "white on red",
        "log.contexto": "bright_black",
    }
)

# Rótulos exibidos no console
_LABELS = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "SUCCESS": "SUCESSO",
    "WARNING": "AVISO",
    "ERROR": "ERRO",
    "CRITICAL": "CRITICO",
}

_TRACEBACK_INSTALADO = False


class BoathubLogger(ILoggingService):
    """Implementação principal do logger com API em português."""

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        self._lock = threading.RLock()
        self._arquivo_handle = None
        self._atexit_registrado = False
        self._config = LoggerConfig()
        self._nivel_minimo = LEVEL_VALUES["INFO"]
        self._console = Console(theme=_DEFAULT_THEME, highlight=False, stderr=True)
        self.configure(config or LoggerConfig())

    # ------------------------------------------------------------------
    # Configuração e contexto
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoggerConfig:
        """Retorna a configuração ativa para fins de inspeção."""
        return self._config

    def configure(self, config: LoggerConfig) -> None:
        """
        Aplica uma nova configuração ao logger.

        Args:
            config: Instância pronta de :class:`LoggerConfig`.
        """
        global _TRACEBACK_INSTALADO

        config.validate()

        with self._lock:
            self._config = config
            self._nivel_minimo = LEVEL_VALUES[normalize_level(config.nivel_minimo)]

            if config.usar_cores:
                self._console = Console(theme=_DEFAULT_THEME, highlight=False, stderr=True)
            else:
                self._console = Console(highlight=False, no_color=True, stderr=True)

            if self._arquivo_handle:
                self._arquivo_handle.close()
                self._arquivo_handle = None

            if config.registrar_traceback_rico and not _TRACEBACK_INSTALADO:
                install_rich_traceback(show_locals=False)
                _TRACEBACK_INSTALADO = True

    def com_contexto(self, **dados: Any) -> "ScopedLogger":
        """
        Retorna um logger derivado com contexto adicional.

        Args:
            **dados: Parâmetros incorporados em todas as mensagens.

        Returns:
            Instância de :class:`ScopedLogger` com o contexto agregado.
        """
        return ScopedLogger(self, {k: v for k, v in dados.items() if v is not None})

    # ------------------------------------------------------------------
    # API pública de logging
    # ------------------------------------------------------------------

    def debug(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("DEBUG", mensagem, dados, None)

    def info(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("INFO", mensagem, dados, None)

    def sucesso(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("SUCCESS", mensagem, dados, None)

    def aviso(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("WARNING", mensagem, dados, None)

    def erro(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("ERROR", mensagem, dados, None)

    def critico(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("CRITICAL", mensagem, dados, None)

    @contextmanager
    def etapa(self, titulo: str, **dados: Any):
        """
        Context manager que registra início, sucesso e falha de uma etapa.

        Args:
            titulo: Nome da etapa exibido nos logs.
            **dados: Metadados adicionais incluídos em cada log gerado.
        """
        with _etapa(self, titulo, dados, None):
            yield

    # ------------------------------------------------------------------
    # Implementação interna
    # ------------------------------------------------------------------

    def deve_emitir(self, nivel: str | int) -> bool:
        """Indica se o nível solicitado deve ser emitido."""
        nome = normalize_level(nivel) or "INFO"
        return LEVEL_VALUES[nome] >= self._nivel_minimo

    def registrar_evento(
        self,
        nivel: str | int,
        mensagem: str,
        dados: Optional[Mapping[str, Any]],
        contexto_extra: Optional[Mapping[str, Any]],
    ) -> None:
        """Consolida dados, contexto e emissões em console/arquivo."""
        if not self.deve_emitir(nivel):
            return

        nome_nivel = normalize_level(nivel) or "INFO"
        dados_limpos = {k: v for k, v in (dados or {}).items() if v is not None}
        instante = datetime.now()

        with self._lock:
            contexto = {k: v for k, v in (contexto_extra or {}).items() if v is not None}

            extras = self.formatar_dict(contexto) + self.formatar_dict(dados_limpos)

            texto = Text()
            if self._config.mostrar_tempo:
                texto.append(instante.strftime("%H:%M:%S"), style="log.time")
                texto.append("  ")

            estilo = f"log.{nome_nivel.lower()}"
            texto.append(f"[{_LABELS[nome_nivel]}]", style=estilo)
            texto.append("  ")
            texto.append(mensagem, style=estilo)
            if extras:
                texto.append("  ")
                texto.append(" ".join(extras), style="log.contexto")

            self._console.print(texto)

            if self._config.arquivo_log:
                self._escrever_arquivo(instante, nome_nivel, mensagem, contexto, dados_limpos)

    def _escrever_arquivo(
        self,
        instante: datetime,
        nome_nivel: str,
        mensagem: str,
        contexto: Mapping[str, Any],
        dados: Mapping[str, Any],
    ) -> None:
        if self._arquivo_handle is None:
            path = Path(self._config.arquivo_log)
            path.parent.mkdir(parents=True, exist_ok=True)
            modo = "w" if self._config.sobrescrever_arquivo else "a"
            self._arquivo_handle = path.open(modo, encoding="utf-8")
            if not self._atexit_registrado:
                atexit.register(self.close)
                self._atexit_registrado = True

        partes = [instante.strftime("%Y-%m-%d %H:%M:%S"), _LABELS[nome_nivel], mensagem]
        if contexto:
            partes.append("contexto=" + ",".join(self.formatar_dict(contexto)))
        if dados:
            partes.append("dados=" + ",".join(self.formatar_dict(dados)))
        self._arquivo_handle.write(" | ".join(partes) + "\n")
        self._arquivo_handle.flush()

    def close(self) -> None:
        """Fecha o arquivo de log (quando houver)."""
        with self._lock:
            if self._arquivo_handle is not None:
                self._arquivo_handle.close()
                self._arquivo_handle = None

    @staticmethod
    def formatar_valor(valor: Any) -> str:
        """Transforma valores em representação amigável para logs."""
        if isinstance(valor, BaseException):
            return f"{type(valor).__name__}({valor})"
        if isinstance(valor, (int, float)):
            return str(valor)
        if isinstance(valor, str):
            if valor.strip() == valor and " " not in valor:
                return valor
            return repr(valor)
        return repr(valor)

    @classmethod
    def formatar_dict(cls, valores: Mapping[str, Any]) -> list[str]:
        """Converte dicionários em pares ``chave=valor`` ordenados."""
        return [f"{chave}={cls.formatar_valor(valores[chave])}" for chave in sorted(valores)]


class ScopedLogger(ILoggingService):
    """Wrapper leve para adicionar contexto fixo em um logger existente."""

    def __init__(self, base: BoathubLogger, contexto: Mapping[str, Any]) -> None:
        self._base = base
        self._contexto = dict(contexto)

    @property
    def contexto(self) -> Dict[str, Any]:
        return dict(self._contexto)

    def com_contexto(self, **dados: Any) -> "ScopedLogger":
        novo = dict(self._contexto)
        novo.update({k: v for k, v in dados.items() if v is not None})
        return ScopedLogger(self._base, novo)

    def debug(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("DEBUG", mensagem, dados, self._contexto)

    def info(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("INFO", mensagem, dados, self._contexto)

    def sucesso(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("SUCCESS", mensagem, dados, self._contexto)

    def aviso(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("WARNING", mensagem, dados, self._contexto)

    def erro(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("ERROR", mensagem, dados, self._contexto)

    def critico(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("CRITICAL", mensagem, dados, self._contexto)

    @contextmanager
    def etapa(self, titulo: str, **dados: Any):
        with _etapa(self._base, titulo, dados, self._contexto):
            yield


@contextmanager
def _etapa(
    base: BoathubLogger,
    titulo: str,
    dados: Mapping[str, Any],
    contexto: Optional[Mapping[str, Any]],
):
    dados_limpos = {k: v for k, v in dados.items() if v is not None}
    inicio = dados_limpos.pop("mensagem_inicial", f"Iniciando etapa: {titulo}")
    sucesso = dados_limpos.pop("mensagem_sucesso", f"Etapa concluída: {titulo}")
    falha = dados_limpos.pop("mensagem_falha", f"Falha na etapa: {titulo}")

    base.registrar_evento("INFO", inicio, dados_limpos, contexto)
    try:
        yield
    except Exception as e:
        base.registrar_evento("ERROR", falha, {**dados_limpos, "erro": e}, contexto)
        raise
    else:
        base.registrar_evento("SUCCESS", sucesso, dados_limpos, contexto)
