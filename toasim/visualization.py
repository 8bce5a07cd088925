"""
Plots of simulation results.
"""

import numpy as np
import matplotlib.pyplot as plt


def plot_simulation(result, ax=None):
    """
    Plots the true track, positions at time of pings and receivers.
    
    Args:
        result: SimulationResult
        ax: Matplotlib axes (created if None)
    
    Returns:
        Matplotlib axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))
    
    track = result.true_track
    ax.plot(track.x, track.y, '-', color='tab:blue', linewidth=1, label='True track')
    ax.plot(result.telemetry.x, result.telemetry.y, '.', color='tab:orange', markersize=3, label='Pings')
    ax.plot(result.receivers.x, result.receivers.y, 'k^', markersize=8, label='Receivers')
    ax.plot(track.x[0], track.y[0], 'go', label='Start')
    
    ax.set_xlabel('X, m')
    ax.set_ylabel('Y, m')
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')
    return ax


def plot_toa(result, ax=None):
    """
    Plots TOA relative to time of ping for each receiver; multipath detections in red.
    
    Args:
        result: SimulationResult
        ax: Matplotlib axes (created if None)
    
    Returns:
        Matplotlib axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 5))
    
    toa = result.toa.toa
    delay = toa - result.telemetry.top[:, np.newaxis]
    ping_idx = np.arange(toa.shape[0])
    
    for j in range(toa.shape[1]):
        ax.plot(ping_idx, delay[:, j], '.', markersize=3, label=f'Receiver {j}')
    
    mp_rows, mp_cols = np.nonzero(result.toa.mp_mat)
    if len(mp_rows):
        ax.plot(mp_rows, delay[mp_rows, mp_cols], 'x', color='red', markersize=5, label='Multipath')
    
    ax.set_xlabel('Ping index')
    ax.set_ylabel('TOA - TOP, s')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right', fontsize='small', ncol=2)
    return ax
