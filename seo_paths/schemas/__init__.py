from .category import (
	CategoryBase,
	CategoryCreate,
	CategoryUpdate,
	CategoryResponse,
	CategoryTreeNode,
	CategoryTreeResponse,
	CategoryListResponse,
	CategoryPathResponse,
	CategorySlugPathResponse,
	CategoryUrlResponse,
	Breadcrumb,
	BreadcrumbListResponse,
)
from .redirect import (
	RedirectCreate,
	RedirectUpdate,
	RedirectResponse,
	RedirectRegisterResponse,
	RedirectResolveResponse,
	RedirectListResponse,
)
from .slug import (
	EntityClass,
	SlugRequest,
	SlugResponse,
)
from .migration import (
	MappingTier,
	MigrationStatus,
	MigrationItemOutcome,
	MigrationResult,
)
from .sitemap import (
	SitemapEntry,
	SitemapBuild,
	IndexerNotifyResult,
	SitemapSubmitResponse,
	SitemapLogCreate,
	SitemapLogResponse,
	SitemapLogListResponse,
)
