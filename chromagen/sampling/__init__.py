from .sampler import Axis, ColorSpaceSampler, Sample, SampleBatch

__all__ = ["Axis", "ColorSpaceSampler", "Sample", "SampleBatch"]
