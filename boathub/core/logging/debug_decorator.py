"""
Decorator de debug automático para logging de métodos.

Fornece logging automático de entrada/saída de métodos síncronos e
corrotinas, com duração e exceções.
"""

from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Callable, TypeVar

F = TypeVar('F', bound=Callable[..., Any])


def debug_log(
    enabled: bool = True,
    log_args: bool = True,
    log_result: bool = True,
    log_duration: bool = True,
    max_arg_length: int = 100,
) -> Callable[[F], F]:
    """
    Decorator que adiciona logging automático de debug em métodos.

    Loga automaticamente:
    - Entrada no método com argumentos
    - Saída do método com resultado
    - Duração da execução
    - Exceções (se ocorrerem)

    Funciona tanto com funções comuns quanto com ``async def``.

    Args:
        enabled: Se o debug está habilitado (default: True)
        log_args: Se deve logar argumentos (default: True)
        log_result: Se deve logar resultado (default: True)
        log_duration: Se deve logar duração (default: True)
        max_arg_length: Tamanho máximo para representação de args (default: 100)

    Example:
        >>> @debug_log(log_result=False)
        >>> async def request(self, endpoint, method="GET"):
        >>>     ...

        # Logs gerados:
        # DEBUG: → RequestPipeline.request("/api/v1/boats", method="POST")
        # DEBUG: ← RequestPipeline.request() [0.153s]
    """
    def decorator(func: F) -> F:
        if not enabled:
            return func

        def _entrada(args: tuple, kwargs: dict) -> tuple[Any, str]:
            logger = _get_logger(args)
            func_name = _get_func_full_name(func, args)
            args_str = _format_arguments(args, kwargs, max_arg_length) if log_args else ""
            logger.debug(f"→ {func_name}({args_str})")
            return logger, func_name

        def _saida(logger: Any, func_name: str, result: Any, start_time: float) -> None:
            result_str = f" -> {_format_value(result, max_arg_length)}" if log_result else ""
            duration_str = f" [{time.time() - start_time:.3f}s]" if log_duration else ""
            logger.debug(f"← {func_name}(){result_str}{duration_str}")

        def _falha(logger: Any, func_name: str, e: BaseException, start_time: float) -> None:
            duration_str = f" [{time.time() - start_time:.3f}s]" if log_duration else ""
            logger.debug(
                f"✗ {func_name}() raised {type(e).__name__}: {str(e)[:100]}{duration_str}"
            )

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                logger, func_name = _entrada(args, kwargs)
                start_time = time.time()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _falha(logger, func_name, e, start_time)
                    raise
                _saida(logger, func_name, result, start_time)
                return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger, func_name = _entrada(args, kwargs)
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _falha(logger, func_name, e, start_time)
                raise
            _saida(logger, func_name, result, start_time)
            return result

        return wrapper  # type: ignore

    return decorator


def _get_logger(args: tuple) -> Any:
    """Obtém logger do self ou usa o global."""
    if args and hasattr(args[0], 'logger'):
        return args[0].logger

    if args and hasattr(args[0], '_logger'):
        return args[0]._logger

    # Importação tardia para evitar import circular
    from boathub.core.logging import get_logger
    return get_logger()


def _get_func_full_name(func: Callable, args: tuple) -> str:
    """Obtém nome completo do método (Class.method ou module.function)."""
    if args and _is_instance_or_class(args[0]):
        return f"{args[0].__class__.__name__}.{func.__name__}"
    return getattr(func, '__qualname__', func.__name__)


def _format_arguments(args: tuple, kwargs: dict, max_length: int) -> str:
    """Formata argumentos para exibição."""
    start_idx = 1 if args and _is_instance_or_class(args[0]) else 0

    parts = [_format_value(arg, max_length) for arg in args[start_idx:]]
    parts.extend(f"{key}={_format_value(value, max_length)}" for key, value in kwargs.items())
    return ", ".join(parts)


def _format_value(value: Any, max_length: int) -> str:
    """Formata valor para exibição limitada."""
    if value is None or isinstance(value, (bool, int, float)):
        return str(value)

    if isinstance(value, str):
        if len(value) > max_length:
            return f'"{value[:max_length]}..."'
        return f'"{value}"'

    # Coleções: apenas a contagem, nunca o conteúdo (payloads podem ter credenciais)
    if isinstance(value, (list, tuple)):
        type_name = type(value).__name__
        return f"{type_name}({len(value)} items)" if value else f"{type_name}()"

    if isinstance(value, dict):
        return f"dict({len(value)} keys)" if value else "dict()"

    try:
        repr_str = repr(value)
        if len(repr_str) <= max_length:
            return repr_str
    except Exception:
        pass

    return f"<{type(value).__name__}>"


def _is_instance_or_class(obj: Any) -> bool:
    """Verifica se objeto é instância ou classe (para ignorar self/cls)."""
    return (
        hasattr(obj, '__class__') and
        not isinstance(obj, (str, int, float, bool, list, dict, tuple, set, type(None)))
    )


def debug(func: F) -> F:
    """Versão simplificada do debug_log com configurações padrão."""
    return debug_log()(func)


__all__ = ['debug_log', 'debug']
