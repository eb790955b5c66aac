# src/retro_chip8/arch/chip8/__init__.py
"""
CHIP-8 Architecture Package
"""
from .cpu import Chip8Cpu
from .state import Chip8CpuState
from .display import WIDTH as DISPLAY_WIDTH, HEIGHT as DISPLAY_HEIGHT
from .roms import DEFAULT_ROM
