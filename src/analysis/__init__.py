from src.analysis.correlation.correlation import WeatherCorrelationCore, WeatherCorrelationAnalyzer

__all__ = ['WeatherCorrelationCore', 'WeatherCorrelationAnalyzer']
