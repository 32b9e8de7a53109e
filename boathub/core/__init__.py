"""Núcleo compartilhado: exceções, logging e configuração."""
