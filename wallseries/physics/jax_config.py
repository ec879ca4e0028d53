"""JAX configuration for interpolation kernels: 64-bit precision and device info."""

import jax
import jax.numpy as jnp

# Time stamps need double precision: float32 loses sub-microsecond resolution after ~10 s
jax.config.update("jax_enable_x64", True)


def get_device_info() -> str:
    """Get available JAX devices as string."""
    devices = jax.devices()
    device_strs = [f"{d.platform}:{d.id}" for d in devices]
    return f"JAX devices: {device_strs}"


__all__ = ['jax', 'jnp', 'get_device_info']
