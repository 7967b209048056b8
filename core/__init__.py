"""Core module - erros, logging e autenticação compartilhados pelo serviço."""
