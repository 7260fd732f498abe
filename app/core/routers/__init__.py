from . import cep
