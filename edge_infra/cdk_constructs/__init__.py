"""CDK constructs for the edge stack.

Each construct names its resource "Default". CDK leaves "Default" out of
logical ids, so the wrapper's id alone determines them, exactly as if the
resource had been created directly under the stack with that id.
"""

from .certificate import ImportedCertificate
from .distribution import CloudFrontDistribution, http_origin
from .dns import ImportedHostedZone
from .policies import CorsResponseHeadersPolicy, EdgeCachePolicy
from .storage import StorageBucket

__all__ = [
  "CloudFrontDistribution",
  "CorsResponseHeadersPolicy",
  "EdgeCachePolicy",
  "ImportedCertificate",
  "ImportedHostedZone",
  "StorageBucket",
  "http_origin",
]
