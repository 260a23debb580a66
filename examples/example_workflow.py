"""
Example: the same inference as a Prefect flow.

Each stage (simulate, build, evaluate, combine) runs as a Prefect task
inside the ``infer`` flow.
"""

import numpy as np
from gridbayes import GridInference, InferenceConfig

gi = GridInference(InferenceConfig(sample_size=20, likelihood_mode="product", seed=0))

result = gi.infer()
print("Posterior mean:", result.posterior_mean)

# Stages can also be called one at a time
grid = gi.build()
likelihood, prior = gi.evaluate(sample=np.array([3.1]), grid=grid, prior_spread=1.0)
post = gi.combine(likelihood=likelihood, prior=prior)
print("Posterior mass sums to", post.normalized.sum())
