class Templates:
    """Шаблоны TypeScript кода для генерации клиента"""

    file_header = """/**
 * Auto-generated type-safe API client
 * Generated from OpenAPI specification{source}
 *
 * This client provides:
 * - Full type safety for all endpoints
 * - Type-safe error handling with discriminated unions
 * - Request/response interceptors
 * - Automatic retry logic with exponential backoff
 */

"""

    result_types = """// ============================================================================
// Result types
// ============================================================================

export type ApiError<TStatus extends number = number> = {
  readonly _tag: 'ApiError';
  readonly status: TStatus;
  readonly message: string;
  readonly data?: unknown;
};

export type ApiSuccess<TData> = {
  readonly _tag: 'Success';
  readonly data: TData;
};

export type ApiResult<TData, TStatus extends number = number> =
  | ApiSuccess<TData>
  | ApiError<TStatus>;

// ============================================================================
// Interceptors
// ============================================================================

export type RequestInterceptor = (request: RequestInit) => RequestInit | Promise<RequestInit>;

export type ResponseInterceptor<T = unknown> = (response: Response, data: T) => T | Promise<T>;

"""

    constructor = """constructor(config?: {
  baseUrl?: string;
  apiKey?: string;
  bearerToken?: string;
  maxRetries?: number;
  retryDelay?: number;
}) {
  if (config?.baseUrl) this.baseUrl = config.baseUrl;
  if (config?.apiKey) this.apiKey = config.apiKey;
  if (config?.bearerToken) this.bearerToken = config.bearerToken;
  if (config?.maxRetries !== undefined) this.maxRetries = config.maxRetries;
  if (config?.retryDelay !== undefined) this.retryDelay = config.retryDelay;
}

"""

    auth_methods = """/**
 * Set API key for authentication
 */
setApiKey(apiKey: string): void {
  this.apiKey = apiKey;
}

/**
 * Set Bearer token for authentication
 */
setBearerToken(token: string): void {
  this.bearerToken = token;
}

"""

    interceptor_methods = """/**
 * Add a request interceptor
 * @example
 * client.addRequestInterceptor((req) => {
 *   req.headers = { ...req.headers, 'X-Custom-Header': 'value' };
 *   return req;
 * });
 */
addRequestInterceptor(interceptor: RequestInterceptor): void {
  this.requestInterceptors.push(interceptor);
}

/**
 * Add a response interceptor
 * @example
 * client.addResponseInterceptor((response, data) => {
 *   console.log('Response:', data);
 *   return data;
 * });
 */
addResponseInterceptor<T>(interceptor: ResponseInterceptor<T>): void {
  this.responseInterceptors.push(interceptor as ResponseInterceptor);
}

"""

    retry_methods = """/**
 * Set retry configuration
 */
setRetryConfig(maxRetries: number, delay: number = 1000): void {
  this.maxRetries = maxRetries;
  this.retryDelay = delay;
}

"""

    internal_fetch = """/**
 * Internal fetch method with interceptors, auth, and retry logic
 */
private async internalFetch<T>(
  url: string,
  options: RequestInit = {}
): Promise<T> {
  // Build headers
  const headers: Record<string, string> = {
    'Content-Type': 'application/json',
    ...(options.headers as Record<string, string> | undefined),
  };

  // Add authentication
  if (this.apiKey) {
    headers['X-API-Key'] = this.apiKey;
  }
  if (this.bearerToken) {
    headers['Authorization'] = `Bearer ${this.bearerToken}`;
  }

  let request: RequestInit = { ...options, headers };

  // Apply request interceptors
  for (const interceptor of this.requestInterceptors) {
    request = await interceptor(request);
  }

  // Retry logic with exponential backoff
  let lastError: Error | null = null;
  for (let attempt = 0; attempt <= this.maxRetries; attempt++) {
    try {
      const response = await fetch(url, request);

      if (!response.ok) {
        const errorText = await response.text().catch(() => response.statusText);
        throw Object.assign(new Error(`API error: ${response.status} ${errorText}`), {
          status: response.status,
          data: errorText,
        });
      }

      const text = await response.text();
      const data = (text ? JSON.parse(text) : undefined) as T;

      // Apply response interceptors
      let processedData = data;
      for (const interceptor of this.responseInterceptors) {
        processedData = await interceptor(response, processedData) as T;
      }

      return processedData;
    } catch (error) {
      lastError = error instanceof Error ? error : new Error(String(error));
      if (attempt < this.maxRetries) {
        const delay = this.retryDelay * Math.pow(2, attempt);
        await new Promise(resolve => setTimeout(resolve, delay));
      }
    }
  }

  throw lastError || new Error('Unknown error');
}

"""

    # Обертка результата вызова в ApiResult
    result_wrapping = """try {
  const data = await this.internalFetch<{response_type}>(finalUrl, options);
  return { _tag: 'Success' as const, data };
} catch (error) {
  if (error instanceof Error && 'status' in error) {
    return {
      _tag: 'ApiError' as const,
      status: (error as any).status,
      message: error.message,
      data: (error as any).data,
    };
  }
  return {
    _tag: 'ApiError' as const,
    status: 500,
    message: error instanceof Error ? error.message : 'Unknown error',
  } as ApiError<any>;
}
"""

    example_header = """/**
 * Example usage of the generated {class_name}
 *
 * This file demonstrates:
 * - Type-safe API calls with autocomplete
 * - Error handling with discriminated unions
 * - Request/response interceptors
 * - Authentication
 * - Retry configuration
 */

import {{ {class_name} }} from {client_module};

// Initialize the client
const client = new {class_name}({{
  baseUrl: {base_url},
  // apiKey: 'your-api-key',
  // bearerToken: 'your-token',
  maxRetries: 3,
}});

// Example: Add request interceptor for logging
client.addRequestInterceptor((request) => {{
  console.log('Making request:', request);
  return request;
}});

// Example: Add response interceptor for data transformation
client.addResponseInterceptor((response, data) => {{
  console.log('Received response:', response.status, data);
  return data;
}});

async function examples() {{
  try {{
"""

    example_footer = """  } catch (error) {
    console.error('Error:', error);
  }
}

// Run examples
examples().catch(console.error);
"""


templates = Templates()
