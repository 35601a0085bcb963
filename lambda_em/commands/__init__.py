# -*- coding: utf-8 -*-
"""Command line actions registered under the ``lambda_em.actions`` group."""
