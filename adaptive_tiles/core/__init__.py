"""
Ядро: подсчёт точек по хешам и послойное слияние в тайлы
"""
