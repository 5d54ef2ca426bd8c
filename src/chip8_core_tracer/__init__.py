# src/chip8_core_tracer/__init__.py
"""
CHIP-8 Core Tracer

CHIP-8仮想マシンのエミュレーションコアと、それを観測するためのデバッガ/UIを提供します。
"""
__version__ = "0.1.0"
