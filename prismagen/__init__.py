"""DMMF document model, generator AST, model indexes and engine binary fetching for a Prisma client generator."""

__version__ = "0.1.0"
__all__ = ["ast", "binaries", "dmmf", "index", "platform"]