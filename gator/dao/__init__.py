# -*- coding: utf-8 -*-
from .dao_base import BaseDAO

__all__ = ["BaseDAO"]
