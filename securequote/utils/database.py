"""
Database connection and query utilities

Provides connection pooling and helper methods for database operations
"""

import psycopg2
from psycopg2.pool import ThreadedConnectionPool
from psycopg2.extras import RealDictCursor
from typing import Optional, List, Dict, Any, Tuple
from contextlib import contextmanager
import logging
import threading

from securequote.utils.config import settings

logger = logging.getLogger(__name__)


class Database:
    """Database connection manager with a lazily created connection pool"""
    
    def __init__(self):
        self.pool: Optional[ThreadedConnectionPool] = None
        self._pool_lock = threading.Lock()
    
    def _initialize_pool(self):
        """Create connection pool"""
        try:
            self.pool = ThreadedConnectionPool(
                minconn=settings.DB_MIN_CONNECTIONS,
                maxconn=settings.DB_MAX_CONNECTIONS,
                host=settings.DB_HOST,
                port=settings.DB_PORT,
                database=settings.DB_NAME,
                user=settings.DB_USER,
                password=settings.DB_PASSWORD
            )
            logger.info(f"Database connection pool initialized ({settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME})")
        except Exception as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise
    
    def _get_pool(self) -> ThreadedConnectionPool:
        """Return the pool, creating it on first use"""
        if self.pool is None:
            with self._pool_lock:
                if self.pool is None:
                    self._initialize_pool()
        return self.pool
    
    @contextmanager
    def get_connection(self):
        """
        Context manager for database connections
        
        Commits when the block succeeds and rolls back when it raises.
        
        Usage:
            with db.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT * FROM quotations")
        """
        pool = self._get_pool()
        conn = None
        try:
            conn = pool.getconn()
            yield conn
            conn.commit()
        except Exception as e:
            if conn:
                conn.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            if conn:
                pool.putconn(conn)
    
    @contextmanager
    def get_cursor(self, dict_cursor: bool = True):
        """
        Context manager for database cursors
        
        Args:
            dict_cursor: If True, returns results as dictionaries
        """
        with self.get_connection() as conn:
            cursor_factory = RealDictCursor if dict_cursor else None
            cursor = conn.cursor(cursor_factory=cursor_factory)
            try:
                yield cursor
            finally:
                cursor.close()
    
    def execute_query(
        self,
        query: str,
        params: Optional[Tuple] = None,
        fetch_one: bool = False,
        dict_cursor: bool = True
    ) -> Optional[Any]:
        """
        Execute a query that returns rows and commit it
        
        Also used for INSERT/UPDATE/DELETE statements with a RETURNING clause.
        
        Args:
            query: SQL query string
            params: Query parameters
            fetch_one: If True, return single row; otherwise return all rows
            dict_cursor: If True, return results as dictionaries
            
        Returns:
            Query results (single row, list of rows, or None)
        """
        with self.get_cursor(dict_cursor=dict_cursor) as cursor:
            cursor.execute(query, params)
            if fetch_one:
                return cursor.fetchone()
            return cursor.fetchall()
    
    def execute_update(
        self,
        query: str,
        params: Optional[Tuple] = None
    ) -> int:
        """
        Execute an INSERT/UPDATE/DELETE or DDL statement
        
        Returns:
            Number of rows affected
        """
        with self.get_cursor(dict_cursor=False) as cursor:
            cursor.execute(query, params)
            return cursor.rowcount
    
    def ping(self) -> bool:
        """Return True if the database answers a trivial query"""
        row = self.execute_query("SELECT 1 AS ok", fetch_one=True)
        return bool(row and row["ok"] == 1)
    
    def close(self):
        """Close all database connections in the pool"""
        with self._pool_lock:
            if self.pool:
                self.pool.closeall()
                self.pool = None
                logger.info("Database connection pool closed")


# Global database instance
db = Database()


def get_db() -> Database:
    """Get the global database instance"""
    return db
